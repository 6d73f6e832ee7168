"""Abstract collaborator interfaces -- swap implementations without touching callers."""

from abc import ABC, abstractmethod
from typing import List

from content_search.search.models import Content, Query, ResultPage, Session


class SearchBackend(ABC):
    """Executes queries against the search index."""

    @abstractmethod
    def execute(self, query: Query) -> ResultPage:
        """Run *query* and return one page of results.

        Implementations raise :class:`~content_search.errors.SearchFailure`
        when the query cannot be executed.
        """
        ...


class Repository(ABC):
    """Resolves result keys into repository content on behalf of a session."""

    @abstractmethod
    def resolve(self, key: str, session: Session) -> Content:
        """Return the content at *key* or raise a ``RepositoryError``."""
        ...

    @abstractmethod
    def children(self, key: str, session: Session) -> List[Content]:
        """Return the direct children of *key* in a stable order."""
        ...
