"""Tests for the background event loop bridge."""

import asyncio
import threading

import pytest

from debate_core.runtime import BackgroundLoop


@pytest.fixture
def runtime():
    loop = BackgroundLoop(name="test-loop")
    yield loop
    loop.close()


def test_run_returns_coroutine_result(runtime):
    async def answer():
        await asyncio.sleep(0)
        return 42

    assert runtime.run(answer(), timeout=2) == 42


def test_call_executes_on_loop_thread(runtime):
    assert runtime.call(lambda: threading.current_thread().name, timeout=2) == "test-loop"


def test_run_propagates_exceptions(runtime):
    async def boom():
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError, match="nope"):
        runtime.run(boom(), timeout=2)


def test_close_stops_the_loop():
    loop = BackgroundLoop()
    assert loop.running

    loop.close()

    assert not loop.running
    loop.close()
