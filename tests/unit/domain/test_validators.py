"""Sales channel validators and error taxonomy."""

import pytest

from sales_channels.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateError,
    ErrorType,
    NotFoundError,
    NotImplementedOperationError,
)
from sales_channels.domain.validators import (
    validate_order,
    validate_paging,
    validate_sales_channel_id,
)


def test_valid_id_passes():
    validate_sales_channel_id("sc_1")


@pytest.mark.parametrize("bad_id", ["", "  ", None, 42])
def test_invalid_id_rejected(bad_id):
    with pytest.raises(DomainValidationError):
        validate_sales_channel_id(bad_id)


def test_paging_bounds():
    validate_paging(0, 10)
    validate_paging(None, None)
    with pytest.raises(DomainValidationError):
        validate_paging(-1, 10)
    with pytest.raises(DomainValidationError):
        validate_paging(0, 0)


def test_order_direction():
    validate_order({"name": "asc", "created_at": "DESC"})
    validate_order(None)
    with pytest.raises(DomainValidationError):
        validate_order({"name": "sideways"})


@pytest.mark.parametrize(
    "error_cls, expected",
    [
        (NotFoundError, ErrorType.NOT_FOUND),
        (DuplicateError, ErrorType.DUPLICATE_ERROR),
        (NotImplementedOperationError, ErrorType.NOT_IMPLEMENTED),
        (DomainValidationError, ErrorType.INVALID_DATA),
    ],
)
def test_error_kinds_are_distinct(error_cls, expected):
    err = error_cls("message")

    assert isinstance(err, DomainError)
    assert err.type == expected
    assert err.message == "message"
