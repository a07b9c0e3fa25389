"""Domain layer: schemas, validators, exceptions. Pure business logic only."""

from sales_channels.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateError,
    ErrorType,
    NotFoundError,
    NotImplementedOperationError,
)
from sales_channels.domain.schemas import (
    CreateSalesChannelInput,
    SalesChannelResponse,
    UpdateSalesChannelInput,
)
from sales_channels.domain.validators import validate_sales_channel_id

__all__ = [
    "CreateSalesChannelInput",
    "DomainError",
    "DomainValidationError",
    "DuplicateError",
    "ErrorType",
    "NotFoundError",
    "NotImplementedOperationError",
    "SalesChannelResponse",
    "UpdateSalesChannelInput",
    "validate_sales_channel_id",
]
