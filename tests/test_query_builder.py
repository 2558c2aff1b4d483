"""Tests for list parameter validation and normalization."""

import pytest

from forum_admin.application.use_cases.queries import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    build_query,
)
from forum_admin.domain.errors import ValidationError
from forum_admin.domain.queries import EntityType, FilterKey, SortField, SortOrder


def test_defaults_for_users():
    plan = build_query("users")

    assert plan.entity is EntityType.USERS
    assert plan.page == 1
    assert plan.page_size == DEFAULT_PAGE_SIZE
    assert plan.sort.field is SortField.CREATED_AT
    assert plan.sort.order is SortOrder.DESC
    assert dict(plan.filters) == {}


def test_tags_default_to_name_ascending():
    plan = build_query(EntityType.TAGS)

    assert plan.sort.field is SortField.NAME
    assert plan.sort.order is SortOrder.ASC


def test_explicit_sort_field_without_order_defaults_to_descending():
    plan = build_query("tags", raw_sort_field="questionCount")

    assert plan.sort.field is SortField.QUESTION_COUNT
    assert plan.sort.order is SortOrder.DESC


def test_sort_order_is_case_insensitive():
    plan = build_query("questions", raw_sort_field="voteScore", raw_sort_order="ASC")

    assert plan.sort.order is SortOrder.ASC


@pytest.mark.parametrize("entity", ["votes", "notifications", "badges", ""])
def test_unlistable_entity_is_rejected(entity):
    with pytest.raises(ValidationError) as excinfo:
        build_query(entity)

    assert excinfo.value.code == "InvalidEntityType"


def test_filter_not_allowed_for_entity_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        build_query("users", {"authorId": "3"})

    assert excinfo.value.code == "InvalidFilterKey"
    assert excinfo.value.field == "authorId"


def test_internal_filter_keys_are_not_accepted_from_callers():
    with pytest.raises(ValidationError) as excinfo:
        build_query("comments", {"createdSince": "2024-01-01"})

    assert excinfo.value.code == "InvalidFilterKey"


def test_filter_values_are_normalized():
    plan = build_query(
        "questions", {"search": "  python  ", "authorId": "7", "tagId": 2}
    )

    assert dict(plan.filters) == {
        FilterKey.SEARCH: "python",
        FilterKey.AUTHOR_ID: 7,
        FilterKey.TAG_ID: 2,
    }


def test_blank_filter_values_are_ignored():
    plan = build_query("users", {"search": "   ", "role": ""})

    assert dict(plan.filters) == {}


def test_role_filter_is_uppercased_and_checked():
    assert build_query("users", {"role": "admin"}).filters[FilterKey.ROLE] == "ADMIN"

    with pytest.raises(ValidationError) as excinfo:
        build_query("users", {"role": "moderator"})
    assert excinfo.value.code == "InvalidFilterValue"


@pytest.mark.parametrize("value", ["abc", "0", "-4"])
def test_invalid_id_filter_values(value):
    with pytest.raises(ValidationError) as excinfo:
        build_query("comments", {"questionId": value})

    assert excinfo.value.code == "InvalidFilterValue"


def test_unknown_sort_field_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        build_query("comments", raw_sort_field="title")

    assert excinfo.value.code == "InvalidSortField"


def test_unknown_sort_order_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        build_query("users", raw_sort_field="name", raw_sort_order="sideways")

    assert excinfo.value.code == "InvalidSortOrder"


@pytest.mark.parametrize(
    ("raw_page", "raw_size", "expected_page", "expected_size"),
    [
        (0, 0, 1, 1),
        (-3, 500, 1, MAX_PAGE_SIZE),
        ("4", "25", 4, 25),
        (None, None, 1, DEFAULT_PAGE_SIZE),
    ],
)
def test_page_parameters_are_clamped(raw_page, raw_size, expected_page, expected_size):
    plan = build_query("users", raw_page=raw_page, raw_page_size=raw_size)

    assert plan.page == expected_page
    assert plan.page_size == expected_size


def test_non_numeric_page_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        build_query("users", raw_page="second")

    assert excinfo.value.code == "InvalidPageParameter"


def test_offset_and_limit_follow_page():
    plan = build_query("users", raw_page=3, raw_page_size=10)

    assert (plan.offset, plan.limit) == (20, 10)


def test_page_is_capped_so_offset_fits_64_bits():
    plan = build_query("users", raw_page=10**19, raw_page_size=MAX_PAGE_SIZE)

    assert plan.page == MAX_PAGE
    assert plan.offset <= 2**63 - 1
