"""Shared test fixtures for pageselect."""

import httpx
import pytest

from pageselect.service.artworks import ArtworkService

from fake_api import PAGE_SIZE, make_payload


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def api_requests():
    """Requests seen by the mock artworks API."""
    return []


@pytest.fixture
def mock_transport(api_requests):
    """Mock artworks endpoint serving 120 records."""

    def handler(request: httpx.Request) -> httpx.Response:
        api_requests.append(request)
        page = int(request.url.params.get("page", "1"))
        limit = int(request.url.params.get("limit", str(PAGE_SIZE)))
        return httpx.Response(200, json=make_payload(page, limit))

    return httpx.MockTransport(handler)


@pytest.fixture
def artwork_service(mock_transport):
    """ArtworkService wired to the mock endpoint."""
    client = httpx.AsyncClient(transport=mock_transport)
    return ArtworkService(base_url="https://api.test/artworks", limit=PAGE_SIZE, client=client)
