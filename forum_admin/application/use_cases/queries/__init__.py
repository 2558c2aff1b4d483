"""Use cases for filtered, sorted and paginated entity listings."""

from collections.abc import Mapping
from typing import Any

from forum_admin.domain.queries import AdminContext, EntityType
from forum_admin.domain.repositories import ForumRepository

from .pagination import Page, build_page, execute_query, total_pages_for
from .query_builder import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    QueryPlan,
    build_query,
)


def list_records(
    repository: ForumRepository,
    context: AdminContext,
    entity_type: EntityType | str,
    *,
    filters: Mapping[str, Any] | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    page: Any = None,
    page_size: Any = None,
) -> Page:
    """Validate a list request and return the requested page."""

    plan = build_query(entity_type, filters, sort_by, sort_order, page, page_size)
    return execute_query(plan, repository, context)


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
    "Page",
    "QueryPlan",
    "build_page",
    "build_query",
    "execute_query",
    "list_records",
    "total_pages_for",
]
