# sales_channels/infrastructure/database/repository.py

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload
from sqlalchemy.sql import Select

from sales_channels.application.query import FindQuery
from sales_channels.domain.exceptions import DomainValidationError

T = TypeVar("T")


class AsyncRepository(Generic[T]):
    """Generic ORM repository. Never commits: the caller's transaction owns commit/rollback."""

    def __init__(self, model: Type[T]):
        self.model = model
        mapper = inspect(model)
        self._columns = {c.key: c for c in mapper.column_attrs}
        self._relations = {r.key: r for r in mapper.relationships}

    def _column(self, name: str):
        if name not in self._columns:
            raise DomainValidationError(
                f"{self.model.__name__} has no field {name!r}"
            )
        return getattr(self.model, name)

    def _statement(self, query: FindQuery) -> Select:
        stmt = select(self.model)

        for key, value in query.where.items():
            column = self._column(key)
            if value is None:
                stmt = stmt.where(column.is_(None))
            elif isinstance(value, tuple):
                stmt = stmt.where(column.in_(value))
            else:
                stmt = stmt.where(column == value)

        if not query.with_deleted and "is_deleted" in self._columns:
            stmt = stmt.where(self.model.is_deleted == False)  # noqa: E712

        if query.select:
            # Primary key is always loaded so the instance keeps its identity.
            fields = set(query.select) | {c.key for c in inspect(self.model).primary_key}
            stmt = stmt.options(load_only(*(self._column(f) for f in sorted(fields))))

        for relation in query.relations:
            if relation not in self._relations:
                raise DomainValidationError(
                    f"{self.model.__name__} has no relation {relation!r}"
                )
            stmt = stmt.options(selectinload(getattr(self.model, relation)))

        for key, direction in query.order.items():
            column = self._column(key)
            stmt = stmt.order_by(column.desc() if direction == "DESC" else column.asc())

        if query.skip:
            stmt = stmt.offset(query.skip)
        if query.take is not None:
            stmt = stmt.limit(query.take)

        if query.skip_locked:
            # Rendered as FOR UPDATE SKIP LOCKED on Postgres; SQLite has no row locks.
            stmt = stmt.with_for_update(skip_locked=True)

        return stmt

    async def find_one(
        self,
        db: AsyncSession,
        query: FindQuery,
    ) -> Optional[T]:
        result = await db.execute(self._statement(query))
        return result.scalars().first()

    async def find(
        self,
        db: AsyncSession,
        query: FindQuery,
    ) -> List[T]:
        result = await db.execute(self._statement(query))
        return list(result.scalars().all())

    def create(self, values: Dict[str, Any]) -> T:
        """Instantiate an unsaved entity. Storage assigns the id on save."""
        for key in values:
            self._column(key)
        return self.model(**values)

    async def save(
        self,
        db: AsyncSession,
        obj: T,
    ) -> T:
        db.add(obj)
        await db.flush()
        await db.refresh(obj)
        return obj

    async def remove(
        self,
        db: AsyncSession,
        obj: T,
    ) -> None:
        await db.delete(obj)
        await db.flush()
