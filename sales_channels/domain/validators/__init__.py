"""Domain validators. Pure validation functions."""

from sales_channels.domain.validators.sales_channel_validator import (
    validate_order,
    validate_paging,
    validate_sales_channel_id,
)

__all__ = [
    "validate_order",
    "validate_paging",
    "validate_sales_channel_id",
]
