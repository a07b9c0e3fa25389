"""
Chaos: broker unavailable while relaying staged events.
System must: keep the update committed, keep events staged, deliver them once the broker returns.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from sales_channels.domain.schemas.sales_channel import (
    CreateSalesChannelInput,
    UpdateSalesChannelInput,
)
from sales_channels.infrastructure.database.models import StagedJob


async def _staged_count(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(StagedJob))


@pytest.fixture
def flaky_publisher(event_bus):
    p = AsyncMock()
    p.publish = AsyncMock(side_effect=ConnectionError("connection refused"))
    event_bus._publisher = p
    return p


@pytest.mark.asyncio
async def test_update_succeeds_while_broker_is_down(
    sales_channel_service,
    session_factory,
    flaky_publisher,
):
    created = await sales_channel_service.create(CreateSalesChannelInput(name="Web"))

    updated = await sales_channel_service.update(created.id, UpdateSalesChannelInput(active=True))

    assert updated.active is True
    flaky_publisher.publish.assert_not_awaited()
    assert await _staged_count(session_factory) == 1


@pytest.mark.asyncio
async def test_relay_failure_keeps_jobs_and_skips_subscribers(
    sales_channel_service,
    session_factory,
    event_bus,
    received_events,
    flaky_publisher,
):
    created = await sales_channel_service.create(CreateSalesChannelInput(name="Web"))
    await sales_channel_service.update(created.id, UpdateSalesChannelInput(active=True))

    with pytest.raises(ConnectionError):
        await event_bus.enqueue_staged_jobs()

    assert await _staged_count(session_factory) == 1
    assert received_events == []


@pytest.mark.asyncio
async def test_relay_recovers_when_broker_returns(
    sales_channel_service,
    session_factory,
    event_bus,
    received_events,
    flaky_publisher,
):
    created = await sales_channel_service.create(CreateSalesChannelInput(name="Web"))
    await sales_channel_service.update(created.id, UpdateSalesChannelInput(active=True))

    with pytest.raises(ConnectionError):
        await event_bus.enqueue_staged_jobs()

    flaky_publisher.publish.side_effect = None
    flaky_publisher.publish.return_value = None

    assert await event_bus.enqueue_staged_jobs() == 1
    assert received_events == [("sales_channel.updated", {"id": created.id})]
    assert await _staged_count(session_factory) == 0


@pytest.mark.asyncio
async def test_unbound_emit_propagates_broker_failure(event_bus, flaky_publisher):
    with pytest.raises(ConnectionError):
        await event_bus.emit("sales_channel.updated", {"id": "sc_1"})
