"""Lifecycle - once-only shutdown shared by every wait point of the poller."""

import asyncio
import threading
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar

from factom_monitor.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class RequestCancelled(Exception):
    """The in-flight request was cancelled by stop()."""


class Lifecycle:
    """Cancellation signal for one monitor.

    - stop() is idempotent and callable from any thread; only the first
      call runs the shutdown actions.
    - wait() races a delay against stop().
    - run_request() registers the in-flight request so stop() can cancel it
      instead of waiting for its deadline.

    Example:
        >>> lifecycle = Lifecycle()
        >>> lifecycle.bind(asyncio.get_running_loop())
        >>> if await lifecycle.wait(1.0):
        ...     return  # stopped
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._stopped = False
        self._closed = asyncio.Event()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._inflight: Optional[asyncio.Future] = None
        self._on_stop: list[Callable[[], None]] = []

    @property
    def stopped(self) -> bool:
        with self._guard:
            return self._stopped

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Remember the event loop that owns the wait points."""
        self._loop = loop

    def on_stop(self, callback: Callable[[], None]) -> None:
        """Register a synchronous action to run once when stop() wins."""
        self._on_stop.append(callback)

    def stop(self) -> bool:
        """Signal shutdown.

        Returns:
            True for the call that actually stopped, False for repeats.
        """
        with self._guard:
            if self._stopped:
                return False
            self._stopped = True

        for callback in self._on_stop:
            callback()

        loop = self._loop
        if loop is None or loop.is_closed():
            self._closed.set()
        elif _running_loop() is loop:
            self._signal()
        else:
            loop.call_soon_threadsafe(self._signal)

        logger.info("lifecycle.stopped")
        return True

    def _signal(self) -> None:
        self._closed.set()
        inflight = self._inflight
        if inflight is not None and not inflight.done():
            inflight.cancel()

    async def wait(self, seconds: float) -> bool:
        """Sleep for ``seconds`` unless stopped first.

        Returns:
            True if the lifecycle was stopped.
        """
        if self._closed.is_set():
            return True
        if seconds <= 0:
            return self.stopped
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return self.stopped
        return True

    async def run_request(self, request: Awaitable[T]) -> T:
        """Await a request that stop() is allowed to cancel.

        Raises:
            RequestCancelled: If stop() cancelled the request.
        """
        task = asyncio.ensure_future(request)
        if self._closed.is_set():
            task.cancel()
        self._inflight = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self.stopped:
                raise RequestCancelled() from None
            raise
        finally:
            self._inflight = None


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
