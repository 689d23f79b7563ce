"""Cancellable timer that coalesces bursts of triggers into one call."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Single-slot coalescing trigger.

    Every trigger() cancels the pending timer and re-arms it, so only the
    last trigger of a burst runs the callback, ``delay`` seconds after it.
    A delay <= 0 runs the callback on the next loop iteration instead.

    Must be used from within a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._handle is not None

    @property
    def task(self) -> asyncio.Task[None] | None:
        """Task of the most recent callback run, if any."""
        return self._task

    def trigger(self) -> None:
        """Arm (or re-arm) the timer."""
        self.cancel()
        if self.delay <= 0:
            self._fire()
            return
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending timer; a callback already running is left alone."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.ensure_future(self.callback())
        self._task.add_done_callback(_log_failure)


def _log_failure(task: asyncio.Task[None]) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error(f"Debounced callback failed: {task.exception()}")
