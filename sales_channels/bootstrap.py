"""Wiring: engine, session factory, repositories, event bus, sales channel service."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sales_channels.application.event_bus import EventBusService
from sales_channels.application.sales_channel_service import SalesChannelService
from sales_channels.config.settings import AppSettings, get_settings
from sales_channels.infrastructure.database.models import SalesChannel, StagedJob
from sales_channels.infrastructure.database.repository import AsyncRepository
from sales_channels.infrastructure.database.session import (
    create_engine_from_settings,
    create_session_factory,
    init_models,
)
from sales_channels.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: AppSettings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    event_bus_service: EventBusService
    sales_channel_service: SalesChannelService
    publisher: Optional[RabbitMQPublisher] = None

    async def init_resources(self) -> None:
        await init_models(self.engine)

    async def close(self) -> None:
        await self.event_bus_service.stop_enqueuer()
        if self.publisher is not None:
            await self.publisher.close()
        await self.engine.dispose()


def build_container(settings: Optional[AppSettings] = None) -> Container:
    """Build every collaborator from settings. No connection is opened until first use."""
    settings = settings or get_settings()

    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)

    publisher = RabbitMQPublisher(settings.rabbitmq_url) if settings.rabbitmq_url else None
    if publisher is None:
        logger.info("rabbitmq_disabled")

    event_bus_service = EventBusService(
        session_factory=session_factory,
        staged_job_repository=AsyncRepository(StagedJob),
        logger=logging.getLogger("sales_channels.event_bus"),
        publisher=publisher,
        exchange_name=settings.event_exchange,
        batch_size=settings.staged_job_batch_size,
    )
    sales_channel_service = SalesChannelService(
        session_factory=session_factory,
        sales_channel_repository=AsyncRepository(SalesChannel),
        event_bus_service=event_bus_service,
        logger=logging.getLogger("sales_channels.sales_channel_service"),
    )

    return Container(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        event_bus_service=event_bus_service,
        sales_channel_service=sales_channel_service,
        publisher=publisher,
    )
