"""Domain schemas. Input payloads and serialization."""

from sales_channels.domain.schemas.sales_channel import (
    CreateSalesChannelInput,
    SalesChannelResponse,
    UpdateSalesChannelInput,
)

__all__ = [
    "CreateSalesChannelInput",
    "SalesChannelResponse",
    "UpdateSalesChannelInput",
]
