"""Runs one search through a named processor and writes the page envelope."""

import time
from typing import Iterator

from content_search.formatting.json_writer import JSONWriter
from content_search.processors.registry import ProcessorRegistry
from content_search.search.models import ITEMS_OPTION, Query, Result, SearchRequest
from content_search.utils.logger import get_logger, log_search

log = get_logger(__name__)


class CountingIterator(Iterator[Result]):
    """Wraps an iterator and counts how many items were pulled from it."""

    def __init__(self, iterator: Iterator[Result]):
        self._iterator = iterator
        self.count = 0

    def __iter__(self) -> "CountingIterator":
        return self

    def __next__(self) -> Result:
        item = next(self._iterator)
        self.count += 1
        return item


class SearchService:
    """Glue between a request, the processor registry and the output writer.

    Output shape::

        {"items": <page size>, "total": <backend size hint>, "results": [...]}
    """

    def __init__(self, registry: ProcessorRegistry):
        self.registry = registry

    def search(
        self,
        request: SearchRequest,
        query: Query,
        processor_name: str,
        writer: JSONWriter,
    ) -> int:
        """Write one page; returns the number of results written."""
        start = time.time()
        processor = self.registry.get(processor_name)
        page = processor.get_result_page(request, query)

        writer.object()
        requested = _requested(query)
        writer.key("items").value(requested)
        writer.key("total").value(page.size)
        writer.key("results").array()
        results = CountingIterator(page.result_iterator())
        processor.write_results(request, writer, results)
        writer.end_array()
        writer.end_object()

        elapsed_ms = (time.time() - start) * 1000
        log.info(
            "Search done -- processor=%s, returned=%d, total=%d, time=%.0fms",
            processor_name,
            results.count,
            page.size,
            elapsed_ms,
        )
        log_search(
            processor=processor_name,
            terms=query.text,
            requested=requested,
            returned=results.count,
            total=page.size,
            response_time_ms=elapsed_ms,
        )
        return results.count


def _requested(query: Query) -> int:
    try:
        return int(query.options.get(ITEMS_OPTION, 0))
    except (TypeError, ValueError):
        return 0
