"""
Debounced Query Coordinator - "latest query wins" for interactive search.

The coordinator receives every keystroke through ``on_input`` and only
issues a search once the input has been quiet for ``quiet_period`` seconds.
A completed search is applied only if the query it was started for is still
the current query; anything else is a stale result and is dropped silently.

All methods must be called from the event loop that runs the searches.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Generic, List, Optional, Set, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_QUIET_PERIOD = 0.5

SearchFunction = Callable[[str], Awaitable[List[T]]]
ResultsCallback = Callable[[str, List[T]], None]


class SearchState(str, Enum):
    """Observable state of the coordinator."""

    IDLE = "idle"
    PENDING = "pending"
    SEARCHING = "searching"


class DebouncedQueryCoordinator(Generic[T]):
    """
    Debounces search input and suppresses stale results.

    At most one timer is armed and at most one fetch is considered live at
    any time. Superseded fetches are cancelled when ``cancel_stale`` is set,
    but cancellation is best effort: whatever a superseded fetch eventually
    returns is discarded by the query check, never applied.
    """

    def __init__(
        self,
        search: SearchFunction,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        on_results: Optional[ResultsCallback] = None,
        cancel_stale: bool = True,
    ):
        """
        Initialize coordinator.

        Args:
            search: Coroutine function returning the result list for a query
            quiet_period: Seconds of input silence before a search is issued
            on_results: Called with (query, results) whenever results are applied
            cancel_stale: Cancel superseded fetch tasks in addition to
                discarding their results
        """
        self._search = search
        self.quiet_period = quiet_period
        self.on_results = on_results
        self.cancel_stale = cancel_stale

        self._query = ""
        self._results: List[T] = []
        self._error: Optional[Exception] = None
        self._timer: Optional[asyncio.Task] = None
        self._fetch: Optional[asyncio.Task] = None
        self._stale_fetches: Set[asyncio.Task] = set()

    @property
    def query(self) -> str:
        """Current query text."""
        return self._query

    @property
    def results(self) -> List[T]:
        """Currently accepted results."""
        return list(self._results)

    @property
    def error(self) -> Optional[Exception]:
        """Failure of the most recent current search, if any."""
        return self._error

    @property
    def state(self) -> SearchState:
        if self._timer is not None and not self._timer.done():
            return SearchState.PENDING
        if self._fetch is not None and not self._fetch.done():
            return SearchState.SEARCHING
        return SearchState.IDLE

    def on_input(self, text: str) -> None:
        """
        Register new input text.

        Empty text returns the coordinator to idle and clears the results
        without searching. Any other text (re)arms the quiet-period timer.
        """
        self._query = text
        self._cancel_timer()
        self._retire_fetch()

        if not text:
            self._results = []
            self._error = None
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.create_task(self._debounce(text), name=f"debounce:{text}")

    async def _debounce(self, query: str) -> None:
        try:
            await asyncio.sleep(self.quiet_period)
        except asyncio.CancelledError:
            logger.debug(f"Debounce timer cancelled for '{query}'")
            raise

        self._timer = None
        if query != self._query:
            return

        loop = asyncio.get_running_loop()
        self._fetch = loop.create_task(self._run_search(query), name=f"search:{query}")

    async def _run_search(self, query: str) -> None:
        logger.debug(f"Searching for '{query}'")
        try:
            results = await self._search(query)
        except asyncio.CancelledError:
            logger.debug(f"Search cancelled for '{query}'")
            raise
        except Exception as e:
            if query == self._query:
                logger.warning(f"Search failed for '{query}': {e}")
                self._error = e
            else:
                logger.debug(f"Dropping stale failure for '{query}': {e}")
            return

        if query != self._query:
            logger.debug(f"Dropping stale results for '{query}' (current: '{self._query}')")
            return

        self._results = list(results)
        self._error = None
        logger.debug(f"Applied {len(self._results)} results for '{query}'")

        if self.on_results is not None:
            self.on_results(query, self.results)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def _retire_fetch(self) -> None:
        fetch = self._fetch
        self._fetch = None
        if fetch is None or fetch.done():
            return

        if self.cancel_stale:
            fetch.cancel()
        self._stale_fetches.add(fetch)
        fetch.add_done_callback(self._stale_fetches.discard)

    async def wait_idle(self) -> None:
        """Wait until no timer is armed and the live fetch has finished."""
        while True:
            pending = [
                task for task in (self._timer, self._fetch)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def reset(self) -> None:
        """Forget the current query and results, e.g. on a source switch."""
        self._query = ""
        self._cancel_timer()
        self._retire_fetch()
        self._results = []
        self._error = None

    async def close(self) -> None:
        """Reset and cancel every outstanding task, stale ones included."""
        self.reset()
        stale = list(self._stale_fetches)
        for task in stale:
            task.cancel()
        if stale:
            await asyncio.gather(*stale, return_exceptions=True)


__all__ = [
    "DEFAULT_QUIET_PERIOD",
    "SearchState",
    "DebouncedQueryCoordinator",
]
