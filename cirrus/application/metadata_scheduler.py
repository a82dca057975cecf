"""
Metadata Scheduler

Architectural Intent:
- Debounces per-item detail fetches so that scrolling through a list with
  the arrow keys does not fire one describe call per row passed
- Only the latest scheduled task runs, once, after a quiet period

Design Decisions:
- Built on loop.call_later: superseding a schedule cancels the timer only;
  a task that has already fired keeps running to completion, so callers
  must check relevance when writing its result back
- Exceptions escaping a fired task are logged, never re-raised, because they
  surface inside an event loop callback with nobody awaiting them
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Task = Callable[[], Awaitable[None]]


class MetadataScheduler:
    def __init__(
        self,
        debounce_ms: int = 1000,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.debounce_ms = debounce_ms
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._in_flight: set[asyncio.Future] = set()
        self.fired_count = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def schedule(self, task: Task, debounce_ms: Optional[int] = None) -> None:
        """Replace any pending task with this one and restart the quiet period."""
        delay_ms = self.debounce_ms if debounce_ms is None else debounce_ms
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(delay_ms / 1000.0, self._fire, task)

    def cancel(self) -> None:
        """Drop the pending task, if any. Running tasks are left alone."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, task: Task) -> None:
        self._handle = None
        self.fired_count += 1
        future = asyncio.ensure_future(task())
        self._in_flight.add(future)
        future.add_done_callback(self._on_done)

    def _on_done(self, future: asyncio.Future) -> None:
        self._in_flight.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Scheduled metadata task failed: %s", exc, exc_info=exc)

    async def join(self) -> None:
        """Wait until every fired task has finished."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
