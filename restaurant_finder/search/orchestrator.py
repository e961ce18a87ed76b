from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from .client import RestaurantSearchClient, SearchError
from .models import SearchParams, SearchState, SortBy

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred"

StateListener = Callable[[SearchState], None]


class SearchOrchestrator:
    """
    Owns the search state and mediates every restaurant fetch.

    Public operations mutate state synchronously and schedule at most one
    backend request each. Readers observe state through ``state`` or by
    subscribing; they never mutate it.

    Overlapping requests are not deduplicated or cancelled. By default the
    response that resolves last wins. With ``discard_stale_responses`` a
    response is dropped once a newer request has been issued.
    """

    def __init__(
        self,
        client: RestaurantSearchClient,
        discard_stale_responses: bool | None = None,
    ) -> None:
        self._client = client
        if discard_stale_responses is None:
            discard_stale_responses = client.config.discard_stale_responses
        self.discard_stale_responses = discard_stale_responses

        self._state = SearchState()
        self._listeners: dict[object, StateListener] = {}
        self._issued = 0
        self._in_flight = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe callable.

        Each call registers separately, so subscribing the same callable twice
        delivers twice and each unsubscribe removes only its own registration.
        """
        token = object()
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    # ── Operations ───────────────────────────────────────────────────────

    def submit_search(self, location: str) -> asyncio.Task[None]:
        if not location:
            raise ValueError("location must be a non-empty string")
        loop = asyncio.get_running_loop()
        return self._issue(loop, location)

    def change_sort_by(self, field: SortBy | str) -> asyncio.Task[None] | None:
        sort_by = SortBy(field)
        loop = self._research_loop()
        self._commit(sort_by=sort_by)
        return self._issue(loop, self._state.location) if loop is not None else None

    def toggle_sort_order(self) -> asyncio.Task[None] | None:
        loop = self._research_loop()
        self._commit(sort_order=self._state.sort_order.toggled())
        return self._issue(loop, self._state.location) if loop is not None else None

    async def wait_idle(self) -> None:
        """Wait until no request is in flight."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel pending requests, settle the state and close the client."""
        for task in list(self._tasks):
            task.cancel()
        await self.wait_idle()
        # Tasks cancelled before their first step never reach _run's cleanup.
        self._in_flight = 0
        if self._state.is_loading:
            self._commit(is_loading=False)
        await self._client.aclose()
        self._listeners.clear()

    # ── Internals ────────────────────────────────────────────────────────

    def _research_loop(self) -> asyncio.AbstractEventLoop | None:
        # Sort changes only refetch once a location has been searched.
        if not self._state.location:
            return None
        return asyncio.get_running_loop()

    def _issue(self, loop: asyncio.AbstractEventLoop, location: str) -> asyncio.Task[None]:
        self._issued += 1
        params = SearchParams(
            location=location,
            sort_by=self._state.sort_by,
            sort_order=self._state.sort_order,
        )
        task = loop.create_task(self._run(self._issued, params))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        self._in_flight += 1
        self._commit(location=location, has_searched=True, is_loading=True, error=None)
        return task

    async def _run(self, seq: int, params: SearchParams) -> None:
        try:
            restaurants = await self._client.search(params)
        except SearchError as exc:
            changes: dict[str, Any] = {"results": (), "error": exc.message}
        except Exception:
            logger.warning("Unexpected failure searching %r", params.location, exc_info=True)
            changes = {"results": (), "error": GENERIC_ERROR_MESSAGE}
        else:
            changes = {"results": tuple(restaurants), "error": None}
        finally:
            self._in_flight -= 1

        if self.discard_stale_responses and seq < self._issued:
            logger.debug("Discarding stale response #%d for %r", seq, params.location)
            changes = {}

        self._commit(is_loading=self._in_flight > 0, **changes)

    def _commit(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners.values()):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Search state listener %r failed", listener)
