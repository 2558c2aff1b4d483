"""Turn raw list parameters into a validated, normalized query plan."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from forum_admin.domain.entities import ROLES
from forum_admin.domain.errors import ValidationError
from forum_admin.domain.queries import (
    ALLOWED_FILTERS,
    ALLOWED_SORTS,
    DEFAULT_SORTS,
    LISTABLE_ENTITIES,
    EntityType,
    FilterKey,
    SortField,
    SortOrder,
    SortSpec,
)

DEFAULT_PAGE: Final[int] = 1
DEFAULT_PAGE_SIZE: Final[int] = 10
MIN_PAGE_SIZE: Final[int] = 1
MAX_PAGE_SIZE: Final[int] = 100
# Largest page whose offset still binds as a signed 64-bit integer.
MAX_PAGE: Final[int] = (2**63 - 1) // MAX_PAGE_SIZE

_ID_FILTERS: Final[frozenset[FilterKey]] = frozenset(
    {FilterKey.AUTHOR_ID, FilterKey.TAG_ID, FilterKey.QUESTION_ID}
)


@dataclass(frozen=True)
class QueryPlan:
    """Resolved list request ready to be executed against a repository."""

    entity: EntityType
    sort: SortSpec
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    filters: Mapping[FilterKey, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def build_query(
    entity_type: EntityType | str,
    raw_filters: Mapping[str, Any] | None = None,
    raw_sort_field: str | None = None,
    raw_sort_order: str | None = None,
    raw_page: Any = None,
    raw_page_size: Any = None,
) -> QueryPlan:
    """Validate caller input and return the matching :class:`QueryPlan`.

    Unknown entities, filter keys, sort fields and sort orders are rejected
    with :class:`ValidationError`. Out-of-range page numbers and page sizes
    are clamped instead, so stray UI input still yields a usable page.
    """

    entity = _parse_entity(entity_type)
    return QueryPlan(
        entity=entity,
        filters=MappingProxyType(_parse_filters(entity, raw_filters or {})),
        sort=_parse_sort(entity, raw_sort_field, raw_sort_order),
        page=min(max(_parse_int(raw_page, "page", DEFAULT_PAGE), DEFAULT_PAGE), MAX_PAGE),
        page_size=min(
            max(_parse_int(raw_page_size, "pageSize", DEFAULT_PAGE_SIZE), MIN_PAGE_SIZE),
            MAX_PAGE_SIZE,
        ),
    )


def _parse_entity(entity_type: EntityType | str) -> EntityType:
    try:
        entity = EntityType(entity_type)
    except ValueError as exc:
        raise ValidationError(
            "InvalidEntityType", f"Unknown entity type: {entity_type}", field="entityType"
        ) from exc
    if entity not in LISTABLE_ENTITIES:
        raise ValidationError(
            "InvalidEntityType", f"{entity.value} cannot be listed", field="entityType"
        )
    return entity


def _parse_filters(entity: EntityType, raw_filters: Mapping[str, Any]) -> dict[FilterKey, Any]:
    allowed = ALLOWED_FILTERS[entity]
    filters: dict[FilterKey, Any] = {}
    for raw_key, raw_value in raw_filters.items():
        try:
            key = FilterKey(raw_key)
        except ValueError:
            key = None
        if key is None or key not in allowed:
            raise ValidationError(
                "InvalidFilterKey",
                f"Unknown filter '{raw_key}' for {entity.value}",
                field=str(raw_key),
            )
        value = _normalize_filter_value(key, raw_value)
        if value is not None:
            filters[key] = value
    return filters


def _normalize_filter_value(key: FilterKey, raw_value: Any) -> Any:
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        raw_value = raw_value.strip()
        if not raw_value:
            return None

    if key is FilterKey.SEARCH:
        return str(raw_value)

    if key is FilterKey.ROLE:
        role = str(raw_value).upper()
        if role not in ROLES:
            raise ValidationError(
                "InvalidFilterValue",
                f"Unknown role '{raw_value}'; expected one of {', '.join(ROLES)}",
                field=key.value,
            )
        return role

    if key in _ID_FILTERS:
        try:
            identifier = int(raw_value)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                "InvalidFilterValue", f"{key.value} must be an integer id", field=key.value
            ) from exc
        if identifier < 1:
            raise ValidationError(
                "InvalidFilterValue", f"{key.value} must be a positive id", field=key.value
            )
        return identifier

    return raw_value


def _parse_sort(
    entity: EntityType, raw_field: str | None, raw_order: str | None
) -> SortSpec:
    default = DEFAULT_SORTS[entity]

    if raw_field is None or (isinstance(raw_field, str) and not raw_field.strip()):
        sort_field = default.field
        fallback_order = default.order
    else:
        try:
            sort_field = SortField(raw_field.strip() if isinstance(raw_field, str) else raw_field)
        except ValueError:
            sort_field = None
        if sort_field is None or sort_field not in ALLOWED_SORTS[entity]:
            raise ValidationError(
                "InvalidSortField",
                f"Cannot sort {entity.value} by '{raw_field}'",
                field="sortBy",
            )
        fallback_order = SortOrder.DESC

    if raw_order is None or (isinstance(raw_order, str) and not raw_order.strip()):
        return SortSpec(sort_field, fallback_order)

    try:
        order = SortOrder(str(raw_order).strip().lower())
    except ValueError as exc:
        raise ValidationError(
            "InvalidSortOrder",
            f"Sort order must be 'asc' or 'desc', got '{raw_order}'",
            field="sortOrder",
        ) from exc
    return SortSpec(sort_field, order)


def _parse_int(raw: Any, name: str, default: int) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    if isinstance(raw, bool):
        raise ValidationError("InvalidPageParameter", f"{name} must be an integer", field=name)
    try:
        return int(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "InvalidPageParameter", f"{name} must be an integer", field=name
        ) from exc


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "QueryPlan",
    "build_query",
]
