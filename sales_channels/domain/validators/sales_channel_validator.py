"""Validators for sales channel lookups. Pure functions, no infrastructure or DB access."""

from typing import Mapping, Optional

from sales_channels.domain.exceptions import DomainValidationError

ORDER_DIRECTIONS = frozenset({"ASC", "DESC"})


def validate_sales_channel_id(sales_channel_id: str) -> None:
    """Identifier must be a non-blank string. Raises DomainValidationError otherwise."""
    if not isinstance(sales_channel_id, str) or not sales_channel_id.strip():
        raise DomainValidationError("sales_channel_id must not be empty")


def validate_paging(skip: Optional[int], take: Optional[int]) -> None:
    """skip must be >= 0 and take must be >= 1 when given."""
    if skip is not None and skip < 0:
        raise DomainValidationError(f"skip must not be negative, got {skip}")
    if take is not None and take < 1:
        raise DomainValidationError(f"take must be positive, got {take}")


def validate_order(order: Optional[Mapping[str, str]]) -> None:
    """Every order direction must be ASC or DESC (case-insensitive)."""
    if not order:
        return
    for field, direction in order.items():
        if str(direction).upper() not in ORDER_DIRECTIONS:
            raise DomainValidationError(
                f"order direction for {field} must be ASC or DESC, got {direction}"
            )
