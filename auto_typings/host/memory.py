"""In-memory host, mirroring an editor's virtual model store."""

from __future__ import annotations


class InMemoryHost:
    """Keeps injected files in a dict keyed by ``root_uri + path``."""

    def __init__(self, root_uri: str = "inmemory://model/") -> None:
        self.root_uri = root_uri
        self.files: dict[str, str] = {}

    def uri_for(self, path: str) -> str:
        return f"{self.root_uri}{path}"

    def get_file(self, path: str) -> str | None:
        return self.files.get(self.uri_for(path))

    def set_file(self, path: str, content: str) -> None:
        self.files[self.uri_for(path)] = content

    def __len__(self) -> int:
        return len(self.files)
