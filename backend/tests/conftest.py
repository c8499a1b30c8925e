"""Shared pytest fixtures for wikisearch tests."""

import logging

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from wikisearch.config import Settings
from wikisearch.context import RequestContext
from wikisearch.main import create_app
from wikisearch.search.client import WikipediaClient
from wikisearch.search.service import SearchService
from wikisearch.utils.logging import LOGGER_NAME, BoundLogger
from wikisearch.web.router import get_search_service

from tests.fixtures import FakeWikipedia


@pytest.fixture
def settings(tmp_path):
    """Development settings: console logging only, debug level."""
    return Settings(
        app_env="development",
        log_level="debug",
        log_file=tmp_path / "wikisearch-test.log",
    )


@pytest.fixture
def wikipedia():
    return FakeWikipedia()


@pytest.fixture
async def upstream(wikipedia):
    """httpx client whose requests are answered by the fake Wikipedia API."""
    async with httpx.AsyncClient(transport=wikipedia.transport()) as http:
        yield http


@pytest.fixture
def wikipedia_client(upstream):
    return WikipediaClient(upstream)


@pytest.fixture
def search_service(wikipedia_client):
    return SearchService(wikipedia_client)


@pytest.fixture
def request_context():
    return RequestContext.new(BoundLogger(logging.getLogger(LOGGER_NAME), {}))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app, search_service):
    """Async test client with the fake upstream wired into the app."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.pop(get_search_service, None)
