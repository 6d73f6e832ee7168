"""The batch result processor interface shared by every strategy."""

from abc import ABC, abstractmethod
from typing import Iterator

from content_search.formatting.json_writer import JSONWriter
from content_search.search.models import Query, Result, ResultPage, SearchRequest


class BatchResultProcessor(ABC):
    """Turns a query into a result page, then writes that page's items.

    ``get_result_page`` must leave the caller's :class:`Query` exactly as it
    found it.  ``write_results`` consumes the iterator once, in order, and
    never pulls an item it does not write.
    """

    @abstractmethod
    def get_result_page(self, request: SearchRequest, query: Query) -> ResultPage:
        ...

    @abstractmethod
    def write_results(
        self,
        request: SearchRequest,
        writer: JSONWriter,
        results: Iterator[Result],
    ) -> None:
        ...
