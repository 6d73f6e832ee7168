"""Formats exactly what the backend returned, resolving each hit in the repository."""

from typing import Iterator

from content_search.errors import FormattingFailure, RepositoryError
from content_search.formatting.formatter import ResultFormatter
from content_search.formatting.json_writer import JSONWriter
from content_search.processors.base import BatchResultProcessor
from content_search.search.backend import Repository, SearchBackend
from content_search.search.models import Query, Result, ResultPage, SearchRequest
from content_search.utils.logger import get_logger

log = get_logger(__name__)


class DirectProcessor(BatchResultProcessor):
    """Resolve every hit to its :class:`Content` and write it as a link or file.

    The first repository failure aborts the page; whatever was already
    written stays written.
    """

    def __init__(
        self,
        backend: SearchBackend,
        repository: Repository,
        formatter: ResultFormatter | None = None,
    ):
        self.backend = backend
        self.repository = repository
        self.formatter = formatter or ResultFormatter(repository)

    def get_result_page(self, request: SearchRequest, query: Query) -> ResultPage:
        return self.backend.execute(query)

    def write_results(
        self,
        request: SearchRequest,
        writer: JSONWriter,
        results: Iterator[Result],
    ) -> None:
        depth = request.depth
        session = request.session
        for result in results:
            try:
                content = self.repository.resolve(result.key, session)
            except RepositoryError as exc:
                log.warning("Aborting page: cannot resolve %s for %s", result.key, session.user_id)
                raise FormattingFailure(f"Could not resolve {result.key}: {exc}") from exc
            self.formatter.write_content(content, session, writer, depth)
