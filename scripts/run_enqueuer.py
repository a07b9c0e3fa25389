# scripts/run_enqueuer.py
"""Relay committed staged events to RabbitMQ and local subscribers until interrupted."""

import asyncio
import logging
import signal

from sales_channels.bootstrap import build_container
from sales_channels.config.logging import configure_logging
from sales_channels.config.settings import get_settings

logger = logging.getLogger("sales_channels.enqueuer")


async def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.rabbitmq_url:
        # A standalone relay has no in-process subscribers; without a broker it delivers nothing.
        logger.error("enqueuer_requires_rabbitmq_url")
        raise SystemExit("RABBITMQ_URL must be set to run the standalone enqueuer")
    container = build_container(settings)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    container.event_bus_service.start_enqueuer(settings.enqueuer_interval_seconds)
    logger.info("enqueuer_started")
    try:
        await stop.wait()
    finally:
        await container.close()
        logger.info("enqueuer_stopped")


if __name__ == "__main__":
    asyncio.run(run())
