"""Execute a query plan and shape the window into a page with navigation data."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from forum_admin.application.use_cases.guards import require_admin
from forum_admin.domain.queries import AdminContext
from forum_admin.domain.repositories import ForumRepository

from .query_builder import QueryPlan

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One window of a list query plus navigation metadata."""

    items: list[T]
    current_page: int
    total_pages: int
    total_count: int
    page_size: int
    has_next: bool
    has_prev: bool


def total_pages_for(total_count: int, page_size: int) -> int:
    """Return ``ceil(total_count / page_size)``, or 0 for an empty result."""

    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


def build_page(
    items: Sequence[T], *, total_count: int, page: int, page_size: int
) -> Page[T]:
    """Assemble a :class:`Page` whose metadata is derived from ``total_count``.

    Items past ``page_size`` are dropped, and a page past the end is always
    empty, so the invariants hold even if the window read raced with writes.
    """

    total_pages = total_pages_for(total_count, page_size)
    window = list(items[:page_size]) if page <= total_pages else []
    return Page(
        items=window,
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        page_size=page_size,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def execute_query(
    plan: QueryPlan, repository: ForumRepository, context: AdminContext
) -> Page:
    """Run ``plan`` with one count and one bounded fetch using identical filters."""

    require_admin(context)
    total_count = repository.count(plan.entity, plan.filters)
    items = repository.fetch(
        plan.entity, plan.filters, plan.sort, plan.offset, plan.limit
    )
    logger.debug(
        "Listed %s page %s (%s items of %s)",
        plan.entity.value,
        plan.page,
        len(items),
        total_count,
    )
    return build_page(
        items, total_count=total_count, page=plan.page, page_size=plan.page_size
    )


__all__ = ["Page", "build_page", "execute_query", "total_pages_for"]
