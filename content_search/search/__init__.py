"""Search module -- data model, backend interfaces, Solr backend, orchestration."""

from content_search.search.backend import Repository, SearchBackend
from content_search.search.models import (
    Content,
    MaterializedResultPage,
    Query,
    Result,
    ResultPage,
    SearchRequest,
    Session,
    StreamingResultPage,
)
from content_search.search.solr_backend import SolrSearchBackend

__all__ = [
    "Content",
    "MaterializedResultPage",
    "Query",
    "Repository",
    "Result",
    "ResultPage",
    "SearchBackend",
    "SearchRequest",
    "Session",
    "SolrSearchBackend",
    "StreamingResultPage",
]
