"""Shared pytest fixtures."""

import pytest

from content_search.search.models import SearchRequest, Session


@pytest.fixture
def session():
    return Session(user_id="alice")


@pytest.fixture
def request_ctx(session):
    return SearchRequest(session=session, params={"items": "10"})
