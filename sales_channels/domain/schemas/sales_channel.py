"""Pydantic schemas for sales channel input and serialization. No DB or infrastructure."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Input schemas
# ---------------------------------------------------------------------------

class CreateSalesChannelInput(BaseModel):
    """Creation payload. The identifier is assigned by storage, never by the caller."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Display name; unique across channels")
    description: Optional[str] = None
    active: Optional[bool] = None


class UpdateSalesChannelInput(BaseModel):
    """
    Partial update payload. Fields the caller did not provide are absent and
    never applied; a field explicitly set to None is applied as null.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_null(cls, v: Optional[str]) -> str:
        """Name is required on the entity, so it may be omitted but not cleared."""
        if v is None:
            raise ValueError("name cannot be null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the caller provided."""
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------

class SalesChannelResponse(BaseModel):
    """Serialized view of a sales channel entity."""

    id: str
    name: str
    description: Optional[str] = None
    active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
