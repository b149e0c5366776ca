import asyncio

import httpx
import pytest

from app.app import app, get_engine
from engine.ranking import RankingEngine
from frontend.client import DEFAULT_ERROR, SearchClient, SearchError
from frontend.session import search_once


def _run(coro):
    return asyncio.run(coro)


async def _search(transport, query, base_url="http://test"):
    async with SearchClient(base_url=base_url, transport=transport) as client:
        return await client.search(query)


class TestSearchClient:
    """Test response handling with a mocked transport."""

    def test_returns_course_list(self):
        """Test a JSON array is returned as-is and q is sent."""
        seen = {}

        def handler(request):
            seen["q"] = request.url.params["q"]
            return httpx.Response(200, json=[{"id": 1, "title": "Intro to Go"}])

        results = _run(_search(httpx.MockTransport(handler), "intro go"))
        assert results == [{"id": 1, "title": "Intro to Go"}]
        assert seen["q"] == "intro go"

    def test_http_error_status(self):
        """Test non-success statuses raise with the status code."""
        transport = httpx.MockTransport(lambda r: httpx.Response(500, json={"error": "x"}))
        with pytest.raises(SearchError, match="HTTP error! status: 500"):
            _run(_search(transport, "go"))

    def test_redirect_status_is_an_error(self):
        """Test a 3xx answer counts as a non-success status."""
        transport = httpx.MockTransport(
            lambda r: httpx.Response(302, headers={"Location": "/elsewhere"}, json=[])
        )
        with pytest.raises(SearchError, match="HTTP error! status: 302"):
            _run(_search(transport, "go"))

    def test_payload_error(self):
        """Test an error payload with a 200 status still raises."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"error": "bad corpus"}))
        with pytest.raises(SearchError, match="bad corpus"):
            _run(_search(transport, "go"))

    def test_non_list_payload(self):
        """Test an unexpected payload shape yields no results."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"courses": []}))
        assert _run(_search(transport, "go")) == []

    def test_invalid_json(self):
        """Test an unparseable body raises the default message."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(SearchError, match=DEFAULT_ERROR):
            _run(_search(transport, "go"))

    def test_transport_failure(self):
        """Test connection errors become SearchError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SearchError, match="connection refused"):
            _run(_search(httpx.MockTransport(handler), "go"))


class TestClientAgainstApp:
    """Test the client against the real ASGI app."""

    def test_end_to_end(self, sample_courses):
        """Test the ranked list travels through HTTP intact."""
        app.dependency_overrides[get_engine] = lambda: RankingEngine(sample_courses)
        try:
            results = _run(_search(httpx.ASGITransport(app=app), "Intro"))
        finally:
            app.dependency_overrides.clear()
        assert [c["id"] for c in results] == [1, 2]
        assert all("score" not in c for c in results)

    def test_missing_corpus_surfaces_status(self):
        """Test a 500 from the app becomes a readable error."""
        app.dependency_overrides[get_engine] = lambda: None
        try:
            with pytest.raises(SearchError, match="500"):
                _run(_search(httpx.ASGITransport(app=app), "go"))
        finally:
            app.dependency_overrides.clear()

    def test_session_through_client(self, sample_courses):
        """Test the Streamlit path (search_once + SearchClient) against the app."""
        async def scenario():
            async with SearchClient(base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
                return await search_once("Intro", client.search, delay=0.01)

        app.dependency_overrides[get_engine] = lambda: RankingEngine(sample_courses)
        try:
            session = _run(scenario())
        finally:
            app.dependency_overrides.clear()
        assert [c["id"] for c in session.results] == [1, 2]
        assert session.stats.total == 2

    def test_session_through_client_error(self):
        """Test a server failure reaches the session as the client's message."""
        async def scenario():
            async with SearchClient(base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
                return await search_once("go", client.search, delay=0.01)

        app.dependency_overrides[get_engine] = lambda: None
        try:
            session = _run(scenario())
        finally:
            app.dependency_overrides.clear()
        assert session.error == "HTTP error! status: 500"
        assert session.results == []
