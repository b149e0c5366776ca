"""
Search session: keystroke debouncing and UI state for one search box.

Every input event carries the full current value. The value is shown at
once, but a request is only sent once typing has paused for `delay`
seconds; each new keystroke disarms the previous timer and arms a fresh
one, so "r", "re", "rea", "reac" typed quickly produce a single request
for "reac".

    IDLE ──input──▶ DEBOUNCING ──timer──▶ LOADING ──response──▶ IDLE | ERROR
                      ▲      │
                      └input─┘

Requests are numbered as they are dispatched. A response is applied only if
it belongs to the most recently dispatched request, so a slow answer for an
old query can never overwrite newer results. Clearing the input also
invalidates anything still in flight.

Typical use:
    async with SearchClient() as client, SearchSession(client.search) as session:
        session.on_input("rea")
        ...
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from engine.config import DEBOUNCE_SECONDS
from frontend.client import DEFAULT_ERROR, SearchError
from frontend.stats import EMPTY_STATS, SearchStats, compute_stats

log = logging.getLogger("frontend")

Course = dict[str, Any]
Fetch  = Callable[[str], Awaitable[list[Course]]]

START_TYPING = "Start typing to search for courses..."


class SearchState(str, Enum):
    IDLE       = "idle"
    DEBOUNCING = "debouncing"
    LOADING    = "loading"
    ERROR      = "error"


class SearchSession:
    def __init__(
        self,
        fetch: Fetch,
        delay: float = DEBOUNCE_SECONDS,
        on_change: Callable[["SearchSession"], None] | None = None,
    ):
        self.fetch     = fetch
        self.delay     = delay
        self.on_change = on_change

        self.query: str = ""
        self.results: list[Course] = []
        self.loading: bool = False
        self.error: str | None = None
        self.state = SearchState.IDLE

        self._timer: asyncio.TimerHandle | None = None
        self._seq = 0
        self._inflight: set[asyncio.Task] = set()
        self._closed = False

        self._stats_for: list[Course] | None = None
        self._stats: SearchStats = EMPTY_STATS

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_input(self, value: str) -> None:
        """Handle one input event; must be called from the running event loop."""
        if self._closed:
            return

        self.query = value
        self._disarm()

        if not value.strip():
            self._seq += 1  # anything still in flight is now stale
            self.results = []
            self.loading = False
            self.error   = None
            self.state   = SearchState.IDLE
        else:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self.delay, self._fire, value)
            self.state  = SearchState.DEBOUNCING

        self._notify()

    @property
    def pending(self) -> bool:
        """True while a debounce timer is armed."""
        return self._timer is not None

    def _disarm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------

    def _fire(self, value: str) -> None:
        self._timer = None
        self._seq  += 1

        self.loading = True
        self.error   = None
        self.state   = SearchState.LOADING

        task = asyncio.get_running_loop().create_task(self._request(self._seq, value))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        self._notify()

    async def _request(self, seq: int, value: str) -> None:
        results: list[Course] = []
        error: str | None = None
        try:
            results = list(await self.fetch(value))
        except SearchError as exc:
            error = str(exc) or DEFAULT_ERROR
        except Exception as exc:
            log.exception("Search for %r failed", value)
            error = str(exc) or DEFAULT_ERROR

        if seq != self._seq:
            log.debug("Discarding stale response #%d for %r", seq, value)
            return

        self.results = [] if error else results
        self.error   = error
        self.loading = False
        if self._timer is not None:
            self.state = SearchState.DEBOUNCING  # newer input still waiting on its timer
        else:
            self.state = SearchState.ERROR if error else SearchState.IDLE
        self._notify()

    async def drain(self) -> None:
        """Wait until no request is in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def settle(self) -> None:
        """Wait for the armed timer to fire and every request it starts to finish."""
        while self._timer is not None or self._inflight:
            if self._inflight:
                await self.drain()
            else:
                await asyncio.sleep(self.delay / 10)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Cancel a pending timer. In-flight requests are left to finish."""
        self._closed = True
        self._disarm()

    async def __aenter__(self) -> "SearchSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Derived view state
    # ------------------------------------------------------------------

    @property
    def stats(self) -> SearchStats:
        if self._stats_for is not self.results:
            self._stats     = compute_stats(self.results)
            self._stats_for = self.results
        return self._stats

    @property
    def placeholder(self) -> str | None:
        busy = self.loading or self.state is SearchState.DEBOUNCING
        return placeholder_for(self.query, self.results, busy, self.error)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)


def placeholder_for(
    query: str, results: list[Course], loading: bool, error: str | None
) -> str | None:
    if not query:
        return START_TYPING
    if not results and not loading and not error:
        return f'No results found for "{query}"'
    return None


async def search_once(query: str, fetch: Fetch, delay: float = DEBOUNCE_SECONDS) -> SearchSession:
    """Feed one input value through a fresh session and return it once settled."""
    async with SearchSession(fetch, delay=delay) as session:
        session.on_input(query)
        await session.settle()
    return session
