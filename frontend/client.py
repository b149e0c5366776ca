"""
Async HTTP client for GET /api/search.

Every failure (non-success status, an {"error": ...} payload, or a transport
problem) is raised as a single SearchError carrying a message fit to show
the user.
"""

import logging
from typing import Any

import httpx

from engine.config import API_URL, REQUEST_TIMEOUT

log = logging.getLogger("frontend")

DEFAULT_ERROR = "An error occurred while searching"


class SearchError(Exception):
    """Human-readable search failure."""


class SearchClient:
    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url  = base_url
        self.timeout   = httpx.Timeout(timeout, connect=5.0)
        self.transport = transport
        self.client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        self.client = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        )

    async def stop(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def __aenter__(self) -> "SearchClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def search(self, query: str) -> list[dict[str, Any]]:
        if self.client is None:
            await self.start()

        try:
            response = await self.client.get("/api/search", params={"q": query})
        except httpx.HTTPError as exc:
            log.warning("Search request failed for q=%r: %s", query, exc)
            raise SearchError(str(exc) or DEFAULT_ERROR) from exc

        if not response.is_success:
            raise SearchError(f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise SearchError(DEFAULT_ERROR) from exc

        if isinstance(data, dict) and data.get("error"):
            raise SearchError(str(data["error"]))

        return data if isinstance(data, list) else []
