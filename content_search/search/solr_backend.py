"""Solr search backend over the JSON ``/select`` handler."""

from typing import Any, Dict, Iterator, List, Optional

import httpx

from content_search.errors import SearchFailure
from content_search.search.backend import SearchBackend
from content_search.search.models import (
    ITEMS_OPTION,
    PAGE_OPTION,
    Query,
    Result,
    ResultPage,
    StreamingResultPage,
)
from content_search.utils.config import settings
from content_search.utils.logger import get_logger

log = get_logger(__name__)

MATCH_ALL = "*:*"


class SolrSearchBackend(SearchBackend):
    """Executes queries against a Solr core.

    The ``items`` and ``page`` options become ``rows``/``start``; every other
    option is passed through to Solr untouched (``sort``, ``fq``, ...).  Rows
    are clamped to ``max_results`` whatever the caller asks for.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_results: int | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url = (base_url or settings.solr_url).rstrip("/")
        self.max_results = max_results if max_results is not None else settings.solr_max_results
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.solr_timeout,
            follow_redirects=True,
        )

    def execute(self, query: Query) -> ResultPage:
        params = self._build_params(query)
        url = f"{self.base_url}/select"
        log.debug("Solr select %s params=%s", url, params)
        try:
            resp = self._client.get(url, params=params)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise SearchFailure(f"Solr query failed: {exc}") from exc
        except ValueError as exc:
            raise SearchFailure("Solr returned a body that is not JSON") from exc

        response = body.get("response") if isinstance(body, dict) else None
        if not isinstance(response, dict):
            raise SearchFailure("Solr response has no 'response' section")
        docs = response.get("docs", [])
        if not isinstance(docs, list) or not all(isinstance(doc, dict) for doc in docs):
            raise SearchFailure("Solr 'docs' is not a list of documents")
        try:
            total = int(response.get("numFound", len(docs)))
        except (TypeError, ValueError) as exc:
            raise SearchFailure(f"Solr 'numFound' is not an integer: {response.get('numFound')!r}") from exc
        log.info("Solr returned %d of %d matches for %r", len(docs), total, query.text)
        return StreamingResultPage(total, _results(docs))

    def close(self) -> None:
        self._client.close()

    def _build_params(self, query: Query) -> Dict[str, str]:
        rows = _non_negative(query.options.get(ITEMS_OPTION), ITEMS_OPTION, settings.default_page_size)
        page = _non_negative(query.options.get(PAGE_OPTION), PAGE_OPTION, 0)
        # Page boundaries follow the requested size; the ceiling only trims rows.
        start = page * rows
        rows = min(rows, self.max_results)

        params = {
            k: v for k, v in query.options.items() if k not in (ITEMS_OPTION, PAGE_OPTION)
        }
        params.update(
            {
                "q": query.text.strip() or MATCH_ALL,
                "rows": str(rows),
                "start": str(start),
                "wt": "json",
            }
        )
        return params


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _non_negative(raw: Optional[str], name: str, default: int) -> int:
    """Parse a paging option; bad values are a failed query, not a config error."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise SearchFailure(f"Invalid value for '{name}': {raw!r}") from exc
    if value < 0:
        raise SearchFailure(f"Invalid value for '{name}': {raw!r}")
    return value


def _results(docs: List[Dict[str, Any]]) -> Iterator[Result]:
    for doc in docs:
        key = doc.get("path") or doc.get("id")
        if key is None:
            log.warning("Skipping Solr doc without path or id: %s", sorted(doc))
            continue
        yield Result(key=str(key), properties=doc)
