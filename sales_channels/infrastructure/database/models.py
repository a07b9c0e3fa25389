# sales_channels/infrastructure/database/models.py

import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from sales_channels.infrastructure.database.session import Base

JsonColumn = JSON().with_variant(JSONB(), "postgresql")


def generate_entity_id(prefix: str) -> str:
    """Prefixed opaque identifier, e.g. sc_0f8c...; assigned on first flush."""
    return f"{prefix}_{uuid.uuid4().hex}"


class BaseModel(Base):
    __abstract__ = True

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    is_deleted = Column(Boolean, nullable=False, default=False)


class SalesChannel(BaseModel):
    """A named context (storefront, marketplace) through which products and orders are exposed."""

    __tablename__ = "sales_channel"

    id = Column(String, primary_key=True, default=lambda: generate_entity_id("sc"))

    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=True)
    active = Column(Boolean, nullable=True)

    def __repr__(self) -> str:
        return f"<SalesChannel id={self.id!r} name={self.name!r}>"


class StagedJob(Base):
    """Event emitted inside a transaction; visible to the relay only once that transaction commits."""

    __tablename__ = "staged_job"

    id = Column(String, primary_key=True, default=lambda: generate_entity_id("job"))

    event_name = Column(String, nullable=False, index=True)
    data = Column(JsonColumn, nullable=False)
    options = Column(JsonColumn, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
