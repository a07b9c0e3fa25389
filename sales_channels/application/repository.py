"""Collaborator protocols. Application layer depends on these; infrastructure implements them."""

from typing import Any, Dict, List, Optional, Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from sales_channels.application.query import FindQuery

T = TypeVar("T")


class Repository(Protocol[T]):
    """Single-entity persistence. Must not commit; the enclosing transaction does."""

    async def find_one(self, db: AsyncSession, query: FindQuery) -> Optional[T]:
        """Return the first entity matching query, or None."""
        ...

    async def find(self, db: AsyncSession, query: FindQuery) -> List[T]:
        ...

    def create(self, values: Dict[str, Any]) -> T:
        """Instantiate an unsaved entity from values."""
        ...

    async def save(self, db: AsyncSession, obj: T) -> T:
        """Persist obj; uniqueness conflicts surface as the driver's integrity error."""
        ...

    async def remove(self, db: AsyncSession, obj: T) -> None:
        ...


class EventPublisher(Protocol):
    """Broker-side delivery of committed events."""

    async def publish(
        self,
        exchange_name: str,
        routing_key: str,
        message: dict,
        idempotency_key: str,
    ) -> None:
        ...
