"""Run a monitor and log every event until interrupted.

    FACTOMD_MONITOR_LOG_FORMAT=console python -m factom_monitor
"""

import asyncio
from typing import Any

from factom_monitor.application.monitoring import Monitor
from factom_monitor.config import bind_monitor_context, get_logger, get_settings, setup_logging
from factom_monitor.infrastructure.messaging import Subscription

logger = get_logger("factom_monitor")


async def _drain(name: str, subscription: Subscription[Any]) -> None:
    async for item in subscription:
        logger.info(f"events.{name}", payload=repr(item))


async def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    bind_monitor_context(settings.factomd_url)

    async with await Monitor.create(settings=settings) as monitor:
        drains = [
            asyncio.create_task(_drain("minute", monitor.subscribe_minute_events())),
            asyncio.create_task(_drain("height", monitor.subscribe_height_events())),
            asyncio.create_task(
                _drain("committed_height", monitor.subscribe_committed_height_events())
            ),
            asyncio.create_task(_drain("error", monitor.subscribe_errors())),
        ]
        try:
            await monitor.wait_closed()
        finally:
            for task in drains:
                task.cancel()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
