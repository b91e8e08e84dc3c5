"""Monitor - public handle over a factomd node's position.

Construction wiring:
- seed request (must succeed, else MonitorConstructionError)
- StateTracker seeded from it
- Broadcaster + Lifecycle
- background asyncio task running the Poller
"""

import asyncio
from typing import Any, Optional

from factom_monitor.config import Settings, get_settings
from factom_monitor.config.logging import get_logger
from factom_monitor.domain.monitoring import (
    MinuteEvent,
    MonitorConstructionError,
    Position,
    StateTracker,
    SubscriptionKind,
)
from factom_monitor.infrastructure.messaging import Broadcaster, Subscription
from factom_monitor.infrastructure.rpc import FactomdClient

from .lifecycle import Lifecycle
from .poller import MinuteSource, Poller

logger = get_logger(__name__)


def _buffer_sizes(settings: Settings) -> dict[SubscriptionKind, int]:
    return {
        SubscriptionKind.MINUTE: settings.minute_buffer_size,
        SubscriptionKind.HEIGHT: settings.height_buffer_size,
        SubscriptionKind.COMMITTED_HEIGHT: settings.committed_height_buffer_size,
        SubscriptionKind.ERROR: settings.error_buffer_size,
    }


class Monitor:
    """Watches one factomd node and notifies subscribers of progress.

    Example:
        >>> monitor = await Monitor.create("http://localhost:8088/v2")
        >>> minutes = monitor.subscribe_minute_events()
        >>> async for event in minutes:
        ...     print(event.height, event.minute)
        >>> monitor.stop()

    Use ``Monitor.create()``; the constructor expects an already seeded
    tracker.
    """

    def __init__(
        self,
        source: MinuteSource,
        tracker: StateTracker,
        settings: Settings,
        *,
        owns_source: bool = False,
    ) -> None:
        self._source = source
        self._tracker = tracker
        self._settings = settings
        self._owns_source = owns_source

        self._broadcaster = Broadcaster(_buffer_sizes(settings))
        self._lifecycle = Lifecycle()
        self._lifecycle.on_stop(self._broadcaster.close)
        self._poller = Poller(source, tracker, self._broadcaster, self._lifecycle, settings)
        self._task: Optional[asyncio.Task] = None

    # ==================== Construction ====================

    @classmethod
    async def create(
        cls,
        url: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        client: Optional[MinuteSource] = None,
    ) -> "Monitor":
        """Seed a monitor from one request and start polling.

        Args:
            url: Node URL (overrides ``settings.factomd_url``).
            settings: Per-instance settings (defaults to get_settings()).
            client: Minute source to use instead of a new FactomdClient.

        Raises:
            MonitorConstructionError: If the seed request fails.
        """
        settings = settings or get_settings()
        if url is not None:
            settings = settings.model_copy(update={"factomd_url": url})

        owns_source = client is None
        source: MinuteSource = client or FactomdClient(
            settings.factomd_url, timeout=settings.request_timeout
        )

        try:
            seed = await source.current_minute(timeout=settings.request_timeout)
        except Exception as e:
            if owns_source and isinstance(source, FactomdClient):
                await source.aclose()
            logger.error(
                "monitor.seed_failed",
                url=settings.factomd_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise MonitorConstructionError(settings.factomd_url, str(e)) from e

        monitor = cls(source, StateTracker(seed), settings, owns_source=owns_source)
        monitor._start()
        logger.info(
            "monitor.started",
            url=settings.factomd_url,
            height=seed.height,
            committed_height=seed.committed_height,
            minute=seed.normalized_minute,
        )
        return monitor

    def _start(self) -> None:
        if self._task is not None:
            return
        loop = asyncio.get_running_loop()
        self._lifecycle.bind(loop)
        self._task = loop.create_task(self._run(), name=f"factomd-monitor:{self.url}")

    async def _run(self) -> None:
        try:
            await self._poller.run()
        finally:
            if self._owns_source and isinstance(self._source, FactomdClient):
                await self._source.aclose()

    # ==================== Queries ====================

    @property
    def url(self) -> str:
        return self._settings.factomd_url

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def stopped(self) -> bool:
        return self._lifecycle.stopped

    def current_position(self) -> Position:
        """Snapshot of (height, committed height, minute). Never blocks."""
        return self._tracker.position

    # ==================== Subscriptions ====================

    def subscribe_minute_events(self) -> Subscription[MinuteEvent]:
        """Channel of MinuteEvent, one per minute (or height) advance."""
        return self._broadcaster.subscribe(SubscriptionKind.MINUTE)

    def subscribe_height_events(self) -> Subscription[int]:
        """Channel of new heights."""
        return self._broadcaster.subscribe(SubscriptionKind.HEIGHT)

    def subscribe_committed_height_events(self) -> Subscription[int]:
        """Channel of new committed (directory block) heights."""
        return self._broadcaster.subscribe(SubscriptionKind.COMMITTED_HEIGHT)

    def subscribe_errors(self) -> Subscription[Exception]:
        """Channel of failed poll attempts."""
        return self._broadcaster.subscribe(SubscriptionKind.ERROR)

    # ==================== Shutdown ====================

    def stop(self) -> None:
        """Stop polling for good. Safe to call repeatedly and concurrently."""
        if self._lifecycle.stop():
            logger.info("monitor.stopped", url=self.url)

    async def wait_closed(self) -> None:
        """Wait for the polling task to exit (call after stop())."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def aclose(self) -> None:
        """stop() and wait for the polling task to finish."""
        self.stop()
        await self.wait_closed()

    async def __aenter__(self) -> "Monitor":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
