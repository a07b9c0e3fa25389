"""build_query: selector normalization and config validation."""

import pytest

from sales_channels.application.query import DEFAULT_LIST_CONFIG, FindConfig, build_query
from sales_channels.domain.exceptions import DomainValidationError


def test_selector_values_are_normalized():
    query = build_query({"id": "sc_1", "name": ["Web", "POS"], "active": None})

    assert query.where == {"id": "sc_1", "name": ("Web", "POS"), "active": None}


def test_config_is_carried_over():
    query = build_query(
        {"id": "sc_1"},
        FindConfig(select=["name"], relations=["locations"], skip=5, take=20, order={"name": "asc"}),
    )

    assert query.select == ("name",)
    assert query.relations == ("locations",)
    assert query.skip == 5
    assert query.take == 20
    assert query.order == {"name": "ASC"}
    assert query.with_deleted is False
    assert query.skip_locked is False


def test_skip_locked_is_carried_over():
    query = build_query({}, FindConfig(skip_locked=True))

    assert query.skip_locked is True


def test_no_config_means_unbounded_lookup():
    query = build_query({"id": "sc_1"})

    assert query.skip is None
    assert query.take is None
    assert query.select == ()


def test_default_list_config():
    assert DEFAULT_LIST_CONFIG.skip == 0
    assert DEFAULT_LIST_CONFIG.take == 10
    assert tuple(DEFAULT_LIST_CONFIG.relations) == ()


def test_invalid_paging_rejected():
    with pytest.raises(DomainValidationError):
        build_query({}, FindConfig(take=0))
