"""Host that materializes declarations in a directory."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryHost:
    """Writes injected files below root so tsc or an LSP server can read them.

    Paths that would escape root (``..`` segments, absolute paths) are
    rejected.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def _path_for(self, path: str) -> Path:
        target = (self.root / path.lstrip("/")).resolve()
        if not target.is_relative_to(self.root):
            raise ValueError(f"Refusing to write outside {self.root}: {path}")
        return target

    def get_file(self, path: str) -> str | None:
        target = self._path_for(path)
        if not target.is_file():
            return None
        return target.read_text(encoding="utf-8")

    def set_file(self, path: str, content: str) -> None:
        target = self._path_for(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {target}")

    def list_files(self) -> list[str]:
        """Relative POSIX paths of every file below root."""
        if not self.root.exists():
            return []
        return sorted(p.relative_to(self.root).as_posix() for p in self.root.rglob("*") if p.is_file())
