"""Tests for page assembly and query execution."""

import pytest

from forum_admin.application.use_cases.queries import (
    build_page,
    build_query,
    execute_query,
    list_records,
    total_pages_for,
)
from forum_admin.domain.errors import NotAuthorized
from forum_admin.domain.queries import AdminContext


class RecordingRepository:
    """Serve slices of a fixed list and remember every call."""

    def __init__(self, items):
        self.items = list(items)
        self.calls = []

    def count(self, entity, filters=None):
        self.calls.append(("count", entity, dict(filters or {})))
        return len(self.items)

    def fetch(self, entity, filters, sort, offset, limit):
        self.calls.append(("fetch", entity, dict(filters or {}), offset, limit))
        return self.items[offset : offset + limit]


@pytest.mark.parametrize(
    ("total", "size", "expected"),
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (23, 10, 3)],
)
def test_total_pages(total, size, expected):
    assert total_pages_for(total, size) == expected


def test_last_partial_page(admin_context):
    repository = RecordingRepository(range(23))
    plan = build_query("users", raw_page=3, raw_page_size=10)

    page = execute_query(plan, repository, admin_context)

    assert page.items == [20, 21, 22]
    assert page.total_count == 23
    assert page.total_pages == 3
    assert page.current_page == 3
    assert page.has_next is False
    assert page.has_prev is True


def test_first_page_navigation(admin_context):
    page = execute_query(
        build_query("users", raw_page_size=10), RecordingRepository(range(23)), admin_context
    )

    assert page.items == list(range(10))
    assert page.has_next is True
    assert page.has_prev is False


def test_page_past_the_end_is_empty(admin_context):
    page = execute_query(
        build_query("users", raw_page=9, raw_page_size=10),
        RecordingRepository(range(23)),
        admin_context,
    )

    assert page.items == []
    assert page.total_pages == 3
    assert page.has_next is False
    assert page.has_prev is True


def test_empty_result(admin_context):
    page = execute_query(build_query("tags"), RecordingRepository([]), admin_context)

    assert page.items == []
    assert page.total_count == 0
    assert page.total_pages == 0
    assert page.has_next is False
    assert page.has_prev is False


def test_count_and_fetch_share_filters(admin_context):
    repository = RecordingRepository(range(5))

    list_records(repository, admin_context, "users", filters={"role": "user"})

    count_call, fetch_call = repository.calls
    assert count_call[0] == "count" and fetch_call[0] == "fetch"
    assert count_call[2] == fetch_call[2]


def test_build_page_truncates_oversized_windows():
    page = build_page(list(range(15)), total_count=40, page=1, page_size=10)

    assert len(page.items) == 10


def test_non_admin_cannot_list():
    repository = RecordingRepository(range(3))

    with pytest.raises(NotAuthorized):
        list_records(repository, AdminContext(actor_id=5, is_admin=False), "users")

    assert repository.calls == []


def test_huge_page_number_returns_empty_page(repository, admin_context, forum):
    forum.user()

    page = list_records(repository, admin_context, "users", page=10**19)

    assert page.items == []
    assert page.total_count == 1
    assert page.has_next is False
    assert page.has_prev is True
