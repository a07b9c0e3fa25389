"""Shared fixtures: in-memory SQLite container with tables created per test."""

import pytest

from sales_channels.application.sales_channel_service import SalesChannelService
from sales_channels.bootstrap import build_container
from sales_channels.config.settings import AppSettings


@pytest.fixture
def settings():
    return AppSettings(
        _env_file=None,
        environment="test",
        database_url="sqlite+aiosqlite://",
        rabbitmq_url=None,
    )


@pytest.fixture
async def container(settings):
    c = build_container(settings)
    await c.init_resources()
    yield c
    await c.close()


@pytest.fixture
def session_factory(container):
    return container.session_factory


@pytest.fixture
def event_bus(container):
    return container.event_bus_service


@pytest.fixture
def sales_channel_service(container) -> SalesChannelService:
    return container.sales_channel_service


@pytest.fixture
def received_events(event_bus):
    """Records every sales_channel.updated delivered to subscribers."""
    received = []

    async def recorder(data, event_name):
        received.append((event_name, data))

    event_bus.subscribe(SalesChannelService.Events.UPDATED, recorder)
    return received
