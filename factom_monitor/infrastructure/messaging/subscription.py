"""Subscription - bounded, lossy, single-consumer channel."""

import asyncio
from typing import Generic, TypeVar

from factom_monitor.domain.monitoring import SubscriptionKind

T = TypeVar("T")


class Subscription(Generic[T]):
    """One subscriber's queue of one kind.

    The producer never waits on it: offer() drops the incoming item when the
    queue is full. Consumers drain it with ``await sub.get()`` or
    ``async for item in sub``.
    """

    def __init__(self, kind: SubscriptionKind, maxsize: int) -> None:
        self.kind = kind
        self.maxsize = maxsize
        self.dropped = 0
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=maxsize)

    def __repr__(self) -> str:
        return (
            f"Subscription(kind={self.kind.value}, size={self._queue.qsize()}/"
            f"{self.maxsize}, dropped={self.dropped})"
        )

    def offer(self, item: T) -> bool:
        """Enqueue without blocking.

        Returns:
            False if the queue was full and the item was dropped.
        """
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True

    async def get(self) -> T:
        """Wait for the next item."""
        return await self._queue.get()

    def get_nowait(self) -> T:
        """Return the next item or raise asyncio.QueueEmpty."""
        return self._queue.get_nowait()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()

    def __aiter__(self) -> "Subscription[T]":
        return self

    async def __anext__(self) -> T:
        return await self._queue.get()
