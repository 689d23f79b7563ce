"""A file on disk treated as an editing surface."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from .protocol import Subscription

logger = logging.getLogger(__name__)


class FileSurface:
    """Watches a file by polling its modification time.

    Listeners are notified from the event loop when the file changes.
    Polling starts with the first listener and stops with the last one.
    """

    def __init__(self, path: Path, poll_interval: float = 0.5) -> None:
        self.path = path.resolve()
        self.poll_interval = poll_interval
        self._listeners: list[Callable[[], None]] = []
        self._poll_task: asyncio.Task[None] | None = None
        self._last_mtime: int | None = None

    @property
    def uri(self) -> str:
        return self.path.as_posix()

    def get_text(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def refresh(self) -> None:
        # A file has no in-memory model to re-validate; readers pick up the output directly
        logger.debug(f"Refresh requested for {self.path}")

    def on_change(self, callback: Callable[[], None]) -> Subscription:
        self._listeners.append(callback)
        if self._poll_task is None:
            self._last_mtime = self._mtime()
            self._poll_task = asyncio.get_running_loop().create_task(self._poll())

        def release() -> None:
            self._listeners.remove(callback)
            if not self._listeners and self._poll_task is not None:
                self._poll_task.cancel()
                self._poll_task = None

        return Subscription(release)

    def _mtime(self) -> int | None:
        try:
            return self.path.stat().st_mtime_ns
        except FileNotFoundError:
            return None

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            mtime = self._mtime()
            if mtime == self._last_mtime:
                continue
            self._last_mtime = mtime
            logger.debug(f"{self.path} changed")
            for listener in list(self._listeners):
                listener()
