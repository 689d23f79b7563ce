"""Protocol for the editing surface a session is attached to."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class Subscription:
    """A listener registration that is released exactly once.

    dispose() runs the release callback the first time and does nothing
    afterwards. Usable as a context manager so the release happens on every
    exit path.
    """

    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Callable[[], None] | None = release

    @property
    def disposed(self) -> bool:
        return self._release is None

    def dispose(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class EditorSurfaceProtocol(Protocol):
    """Text editing surface whose imports get declarations."""

    @property
    def uri(self) -> str:
        """URI or path of the edited file; its directory anchors relative imports."""
        ...

    def get_text(self) -> str:
        """Current full text content."""
        ...

    def on_change(self, callback: Callable[[], None]) -> Subscription:
        """Call callback whenever the content changes.

        Returns:
            Subscription releasing the listener.
        """
        ...

    def refresh(self) -> None:
        """Make the surface re-read declarations (cursor position preserved)."""
        ...
