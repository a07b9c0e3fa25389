"""Sales channel application service: retrieve, create, update inside one transaction each."""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sales_channels.application.event_bus import EventBusService
from sales_channels.application.query import DEFAULT_LIST_CONFIG, FindConfig, build_query
from sales_channels.application.repository import Repository
from sales_channels.application.transaction import TransactionBaseService
from sales_channels.domain.exceptions import (
    DuplicateError,
    NotFoundError,
    NotImplementedOperationError,
)
from sales_channels.domain.schemas.sales_channel import (
    CreateSalesChannelInput,
    UpdateSalesChannelInput,
)
from sales_channels.domain.validators import validate_sales_channel_id
from sales_channels.infrastructure.database.exception_formatter import is_duplicate_error
from sales_channels.infrastructure.database.models import SalesChannel


class SalesChannelService(TransactionBaseService):
    """
    CRUD access to sales channels. Every operation runs in exactly one transaction,
    new or the one supplied through with_transaction(); update stages its event in
    that same transaction.
    """

    class Events:
        UPDATED = "sales_channel.updated"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        sales_channel_repository: Repository,
        event_bus_service: EventBusService,
        logger: logging.Logger,
    ) -> None:
        super().__init__(session_factory, logger)
        self._sales_channel_repository = sales_channel_repository
        self._event_bus = event_bus_service

    async def retrieve(
        self,
        sales_channel_id: str,
        config: Optional[FindConfig] = None,
    ) -> SalesChannel:
        """Return the sales channel with this id. Raises NotFoundError if there is none."""
        validate_sales_channel_id(sales_channel_id)
        query = build_query({"id": sales_channel_id}, config)

        async def work(session: AsyncSession) -> SalesChannel:
            sales_channel = await self._sales_channel_repository.find_one(session, query)
            if sales_channel is None:
                raise NotFoundError(
                    f"Sales channel with id {sales_channel_id} was not found"
                )
            return sales_channel

        return await self.atomic_phase(work)

    async def list_and_count(
        self,
        selector: Optional[Mapping[str, Any]] = None,
        config: FindConfig = DEFAULT_LIST_CONFIG,
    ) -> Tuple[List[SalesChannel], int]:
        raise NotImplementedOperationError("SalesChannelService.list_and_count is not implemented")

    async def create(self, data: CreateSalesChannelInput) -> SalesChannel:
        """Persist a new sales channel. A name collision raises DuplicateError."""

        async def work(session: AsyncSession) -> SalesChannel:
            sales_channel = self._sales_channel_repository.create(data.model_dump())
            return await self._sales_channel_repository.save(session, sales_channel)

        async def on_error(err: Exception) -> None:
            if is_duplicate_error(err):
                raise DuplicateError(
                    f"Sales channel with name {data.name} already exists"
                ) from err

        sales_channel = await self.atomic_phase(work, on_error)
        self._logger.info(
            "sales_channel_created",
            extra={"sales_channel_id": sales_channel.id},
        )
        return sales_channel

    async def update(
        self,
        sales_channel_id: str,
        data: UpdateSalesChannelInput,
    ) -> SalesChannel:
        """Apply the provided fields only, save, and stage sales_channel.updated."""

        async def work(session: AsyncSession) -> SalesChannel:
            sales_channel = await self.with_transaction(session).retrieve(sales_channel_id)

            for key, value in data.changes().items():
                setattr(sales_channel, key, value)

            result = await self._sales_channel_repository.save(session, sales_channel)

            await self._event_bus.with_transaction(session).emit(
                self.Events.UPDATED,
                {"id": result.id},
            )
            return result

        sales_channel = await self.atomic_phase(work)
        self._logger.info(
            "sales_channel_updated",
            extra={"sales_channel_id": sales_channel.id},
        )
        return sales_channel

    async def delete(self, sales_channel_id: str) -> None:
        raise NotImplementedOperationError("SalesChannelService.delete is not implemented")
