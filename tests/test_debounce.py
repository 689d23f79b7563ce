"""Tests for the debouncer."""

import asyncio
import logging

import pytest

from auto_typings.debounce import Debouncer


class TestDebouncer:
    """Tests for trigger coalescing."""

    @pytest.mark.asyncio
    async def test_burst_coalesced(self) -> None:
        calls: list[int] = []

        async def callback() -> None:
            calls.append(1)

        debouncer = Debouncer(0.02, callback)
        for _ in range(5):
            debouncer.trigger()
        assert debouncer.pending

        while debouncer.pending:
            await asyncio.sleep(0.01)
        await debouncer.task

        assert calls == [1]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_zero_delay_runs_immediately(self) -> None:
        calls: list[int] = []

        async def callback() -> None:
            calls.append(1)

        debouncer = Debouncer(0, callback)
        debouncer.trigger()
        assert not debouncer.pending

        await debouncer.task
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_cancel(self) -> None:
        calls: list[int] = []

        async def callback() -> None:
            calls.append(1)

        debouncer = Debouncer(0.01, callback)
        debouncer.trigger()
        debouncer.cancel()
        await asyncio.sleep(0.03)

        assert calls == []
        assert debouncer.task is None

    @pytest.mark.asyncio
    async def test_failure_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        async def callback() -> None:
            raise RuntimeError("resolution exploded")

        debouncer = Debouncer(0, callback)
        with caplog.at_level(logging.ERROR, logger="auto_typings.debounce"):
            debouncer.trigger()
            with pytest.raises(RuntimeError):
                await debouncer.task
            await asyncio.sleep(0)

        assert "resolution exploded" in caplog.text
