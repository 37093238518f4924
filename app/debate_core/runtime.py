"""
Purpose: Give the synchronous Streamlit script a long-lived asyncio loop.

Streamlit re-runs the script top to bottom on every interaction, so the
controller, its sync loop and the httpx client live on one event loop in a
daemon thread. The script submits coroutines with run() and reads state with
call(), which executes on the loop thread so reads never interleave with a
half-applied update.
"""

from __future__ import annotations
import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackgroundLoop:
    def __init__(self, name: str = "debate-panel-loop"):
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._serve, name=name, daemon=True
        )
        self._thread.start()

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._loop.is_closed()

    def run(self, coro: Awaitable[T], timeout: Optional[float] = None) -> T:
        """Run a coroutine on the loop and wait for its result."""
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result(timeout)

    def call(self, fn: Callable[..., T], *args: Any, timeout: Optional[float] = None) -> T:
        """Run a plain callable on the loop thread and wait for its result."""

        async def _invoke() -> T:
            return fn(*args)

        return self.run(_invoke(), timeout)

    def close(self) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)
        if not self._thread.is_alive():
            self._loop.close()
        logger.debug("Background loop closed")
