"""Unit tests for the Solr backend, using httpx's mock transport."""

import httpx
import pytest

from content_search.errors import SearchFailure
from content_search.processors.config import SamplingConfig, SamplingConfigHolder
from content_search.processors.sampling import SamplingProcessor
from content_search.search.models import Query
from content_search.search.solr_backend import SolrSearchBackend


def _backend(handler, max_results=100):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SolrSearchBackend(base_url="http://solr.test/solr/content/", max_results=max_results, client=client)


def _ok(docs, num_found=None):
    def handler(request):
        handler.seen.append(request)
        return httpx.Response(
            200,
            json={"response": {"numFound": len(docs) if num_found is None else num_found, "docs": docs}},
        )

    handler.seen = []
    return handler


def test_builds_select_params_and_maps_docs():
    handler = _ok([{"path": "/a", "title": "A"}, {"id": "b-id", "title": "B"}], num_found=57)
    backend = _backend(handler)

    page = backend.execute(Query("cats", {"items": "10", "page": "2", "fq": "type:file"}))
    results = list(page.result_iterator())

    sent = handler.seen[0]
    assert sent.url.path == "/solr/content/select"
    params = dict(sent.url.params)
    assert params == {"fq": "type:file", "q": "cats", "rows": "10", "start": "20", "wt": "json"}
    assert page.size == 57
    assert [r.key for r in results] == ["/a", "b-id"]
    assert results[0].properties["title"] == "A"


def test_blank_terms_match_everything_and_rows_are_clamped():
    handler = _ok([])
    backend = _backend(handler, max_results=100)
    backend.execute(Query("  ", {"items": "400"}))
    params = dict(handler.seen[0].url.params)
    assert params["q"] == "*:*"
    assert params["rows"] == "100"


def test_docs_without_key_are_skipped():
    backend = _backend(_ok([{"title": "orphan"}, {"path": "/ok"}]))
    assert [r.key for r in backend.execute(Query("", {"items": "5"})).result_iterator()] == ["/ok"]


def test_result_page_is_single_pass():
    page = _backend(_ok([{"path": "/a"}])).execute(Query("", {"items": "5"}))
    assert len(list(page.result_iterator())) == 1
    assert list(page.result_iterator()) == []


@pytest.mark.parametrize("options", [{"items": "lots"}, {"items": "-1"}, {"page": "x"}])
def test_bad_paging_options_fail_before_request(options):
    handler = _ok([])
    with pytest.raises(SearchFailure):
        _backend(handler).execute(Query("", options))
    assert handler.seen == []


def test_http_error_status():
    backend = _backend(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(SearchFailure):
        backend.execute(Query("", {"items": "5"}))


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SearchFailure):
        _backend(handler).execute(Query("", {"items": "5"}))


@pytest.mark.parametrize(
    "response",
    [httpx.Response(200, text="<html>"), httpx.Response(200, json={"error": "nope"})],
)
def test_unusable_body(response):
    with pytest.raises(SearchFailure):
        _backend(lambda request: response).execute(Query("", {"items": "5"}))


@pytest.mark.parametrize(
    "response",
    [
        {"numFound": None, "docs": []},
        {"numFound": "lots", "docs": []},
        {"numFound": 1, "docs": None},
        {"numFound": 1, "docs": ["not-a-doc"]},
    ],
)
def test_malformed_response_section_fails_in_execute(response):
    backend = _backend(lambda request: httpx.Response(200, json={"response": response}))
    with pytest.raises(SearchFailure):
        backend.execute(Query("", {"items": "2"}))


@pytest.mark.parametrize(
    "response",
    [{"numFound": None, "docs": []}, {"numFound": 3, "docs": [{"path": "/a"}, 7]}],
)
def test_malformed_response_is_a_search_failure_for_the_sampler(request_ctx, response):
    backend = _backend(lambda request: httpx.Response(200, json={"response": response}))
    sampler = SamplingProcessor(backend, SamplingConfigHolder(SamplingConfig()), seed=1)
    with pytest.raises(SearchFailure):
        sampler.get_result_page(request_ctx, Query("", {"items": "2"}))


def test_page_boundaries_ignore_row_ceiling():
    handler = _ok([])
    _backend(handler, max_results=100).execute(Query("", {"items": "200", "page": "1"}))
    params = dict(handler.seen[0].url.params)
    assert params["rows"] == "100"
    assert params["start"] == "200"
