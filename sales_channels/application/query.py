"""Find configuration and query building shared by services and repositories."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from sales_channels.domain.validators import validate_order, validate_paging


@dataclass(frozen=True)
class FindConfig:
    """Caller-supplied lookup options: field selection, relation expansion, paging, ordering."""

    select: Optional[Sequence[str]] = None
    relations: Sequence[str] = ()
    skip: Optional[int] = None
    take: Optional[int] = None
    order: Optional[Mapping[str, str]] = None
    with_deleted: bool = False
    # Row lock that lets concurrent readers skip rows another transaction holds.
    skip_locked: bool = False


DEFAULT_LIST_CONFIG = FindConfig(relations=(), skip=0, take=10)


@dataclass(frozen=True)
class FindQuery:
    """Normalized lookup handed to a repository."""

    where: Dict[str, Any] = field(default_factory=dict)
    select: Tuple[str, ...] = ()
    relations: Tuple[str, ...] = ()
    skip: Optional[int] = None
    take: Optional[int] = None
    order: Dict[str, str] = field(default_factory=dict)
    with_deleted: bool = False
    skip_locked: bool = False


def build_query(
    selector: Optional[Mapping[str, Any]] = None,
    config: Optional[FindConfig] = None,
) -> FindQuery:
    """
    Merge a selector with a find config. Selector values: scalar -> equality,
    list/tuple/set -> IN, None -> IS NULL (resolved by the repository).
    """
    config = config or FindConfig()
    validate_paging(config.skip, config.take)
    validate_order(config.order)

    where: Dict[str, Any] = {}
    for key, value in (selector or {}).items():
        if isinstance(value, (list, tuple, set, frozenset)):
            where[key] = tuple(value)
        else:
            where[key] = value

    return FindQuery(
        where=where,
        select=tuple(config.select or ()),
        relations=tuple(config.relations or ()),
        skip=config.skip,
        take=config.take,
        order={k: str(v).upper() for k, v in (config.order or {}).items()},
        with_deleted=config.with_deleted,
        skip_locked=config.skip_locked,
    )
