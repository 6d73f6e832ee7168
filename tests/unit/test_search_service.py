"""Unit tests for the processor registry and the search service envelope."""

import io
import itertools
import json
from unittest.mock import patch

import pytest

from content_search.errors import ConfigurationError, FormattingFailure, SearchFailure
from content_search.formatting.json_writer import JSONWriter
from content_search.processors.config import SamplingConfig, SamplingConfigHolder
from content_search.processors.direct import DirectProcessor
from content_search.processors.registry import (
    FILES,
    RANDOM_CONTENT,
    ProcessorRegistry,
    build_default_registry,
)
from content_search.processors.sampling import SamplingProcessor
from content_search.search.models import Query, Result
from content_search.search.service import CountingIterator, SearchService
from tests.fakes import FakeBackend, FakeRepository, make_results


@pytest.fixture
def repo():
    r = FakeRepository()
    for i in range(3):
        r.add(f"/content/item{i}", title=f"T{i}")
    return r


class TestRegistry:
    def test_default_registry_names(self, repo):
        registry = build_default_registry(FakeBackend([]), repo)
        assert registry.names() == [FILES, RANDOM_CONTENT]
        assert isinstance(registry.get(FILES), DirectProcessor)
        assert isinstance(registry.get(RANDOM_CONTENT), SamplingProcessor)

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            ProcessorRegistry().get("nope")

    def test_register_replaces_and_unregister_removes(self, repo):
        registry = ProcessorRegistry()
        first = DirectProcessor(FakeBackend([]), repo)
        second = DirectProcessor(FakeBackend([]), repo)
        registry.register("x", first)
        registry.register("x", second)
        assert registry.get("x") is second
        registry.unregister("x")
        assert registry.names() == []


@patch("content_search.search.service.log_search")
class TestSearchService:
    def _search(self, registry, name, query, request):
        buf = io.StringIO()
        count = SearchService(registry).search(request, query, name, JSONWriter(buf))
        return count, buf

    def test_files_envelope(self, mock_log, repo, request_ctx):
        registry = build_default_registry(FakeBackend(make_results(3)), repo)
        count, buf = self._search(registry, FILES, Query("t", {"items": "10"}), request_ctx)
        body = json.loads(buf.getvalue())
        assert count == 3
        assert body["items"] == 10
        assert body["total"] == 3
        assert [r["title"] for r in body["results"]] == ["T0", "T1", "T2"]
        mock_log.assert_called_once()
        assert mock_log.call_args.kwargs["returned"] == 3

    def test_random_content_envelope(self, mock_log, repo, request_ctx):
        holder = SamplingConfigHolder(SamplingConfig(amplification_factor=4))
        registry = build_default_registry(FakeBackend(make_results(100)), repo, holder, seed=3)
        count, buf = self._search(registry, RANDOM_CONTENT, Query("", {"items": "10"}), request_ctx)
        body = json.loads(buf.getvalue())
        assert count == 10
        assert body["total"] == 10
        assert len({r["path"] for r in body["results"]}) == 10
        assert all(r["n"] < 40 for r in body["results"])

    def test_search_failure_writes_nothing(self, mock_log, repo, request_ctx):
        registry = build_default_registry(FakeBackend([], fail=True), repo)
        with pytest.raises(SearchFailure):
            self._search(registry, FILES, Query("", {"items": "10"}), request_ctx)
        mock_log.assert_not_called()

    def test_formatting_failure_propagates(self, mock_log, repo, request_ctx):
        registry = build_default_registry(FakeBackend([Result("/missing")]), repo)
        with pytest.raises(FormattingFailure):
            self._search(registry, FILES, Query("", {"items": "10"}), request_ctx)
        mock_log.assert_not_called()


def test_counting_iterator_counts_only_pulled_items():
    source = iter(make_results(5))
    counted = CountingIterator(source)
    assert [r.key for r in itertools.islice(counted, 2)] == ["/content/item0", "/content/item1"]
    assert counted.count == 2
    assert next(source).key == "/content/item2"
