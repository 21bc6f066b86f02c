"""Tests for the debounce utility."""

from __future__ import annotations

import asyncio

from recipebox.client.debounce import Debouncer


def test_rapid_calls_collapse_into_the_last_one():
    calls = []

    async def scenario():
        debounced = Debouncer(calls.append, wait=0.02)
        for value in ("a", "ab", "abc"):
            debounced(value)
            await asyncio.sleep(0.005)
        assert calls == []
        await asyncio.sleep(0.05)
        return debounced

    debounced = asyncio.run(scenario())

    assert calls == ["abc"]
    assert not debounced.pending


def test_calls_separated_by_quiet_period_all_run():
    calls = []

    async def scenario():
        debounced = Debouncer(calls.append, wait=0.01)
        debounced(1)
        await asyncio.sleep(0.04)
        debounced(2)
        await asyncio.sleep(0.04)

    asyncio.run(scenario())

    assert calls == [1, 2]


def test_coroutine_callback_is_scheduled_as_task():
    seen = []

    async def record(value):
        seen.append(value)
        return value

    async def scenario():
        debounced = Debouncer(record, wait=0.01)
        debounced("x")
        while debounced.pending:
            await asyncio.sleep(0.005)
        return await debounced.last_task

    result = asyncio.run(scenario())

    assert result == "x"
    assert seen == ["x"]
