"""Shared fakes for auto-typings tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable

import pytest

from auto_typings.editor.protocol import Subscription
from auto_typings.exceptions import SourceFetchError


def manifest(types: str | None = "index.d.ts", version: str = "1.0.0", **extra: object) -> str:
    """A package.json document."""
    data: dict[str, object] = {"version": version, **extra}
    if types is not None:
        data["types"] = types
    return json.dumps(data)


class FakeSourceResolver:
    """Serves files from a dict of packages and records every fetch."""

    def __init__(
        self,
        packages: dict[str, dict[str, str]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.packages = packages or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str, str | None]] = []
        self.closed = False

    async def fetch(self, package_name: str, sub_path: str, version: str | None = None) -> str | None:
        self.calls.append((package_name, sub_path, version))
        if package_name in self.failing:
            raise SourceFetchError(f"Failed to fetch {package_name}/{sub_path}: connection reset")
        return self.packages.get(package_name, {}).get(sub_path)

    def fetched(self, package_name: str) -> list[str]:
        return [sub_path for name, sub_path, _ in self.calls if name == package_name]

    async def aclose(self) -> None:
        self.closed = True

    async def __aenter__(self) -> FakeSourceResolver:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class BlockingSourceResolver(FakeSourceResolver):
    """Fake resolver whose fetches wait until release() is called."""

    def __init__(self, packages: dict[str, dict[str, str]] | None = None) -> None:
        super().__init__(packages)
        self.started = asyncio.Event()
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def fetch(self, package_name: str, sub_path: str, version: str | None = None) -> str | None:
        self.started.set()
        await self._gate.wait()
        return await super().fetch(package_name, sub_path, version)


class FakeEditor:
    """In-memory editing surface."""

    def __init__(self, text: str = "", uri: str = "inmemory://model/main.ts") -> None:
        self.text = text
        self.uri = uri
        self.listeners: list[Callable[[], None]] = []
        self.refresh_count = 0

    def get_text(self) -> str:
        return self.text

    def on_change(self, callback: Callable[[], None]) -> Subscription:
        self.listeners.append(callback)
        return Subscription(lambda: self.listeners.remove(callback))

    def refresh(self) -> None:
        self.refresh_count += 1

    def edit(self, text: str) -> None:
        self.text = text
        for listener in list(self.listeners):
            listener()


LEFT_PAD_DTS = "export declare function leftPad(s: string, n: number): string;\n"


@pytest.fixture
def left_pad_packages() -> dict[str, dict[str, str]]:
    return {
        "left-pad": {
            "package.json": manifest(version="1.3.0"),
            "index.d.ts": LEFT_PAD_DTS,
        }
    }
