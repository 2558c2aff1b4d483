"""Closed vocabularies shared by the query builder and repository adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping


class EntityType(str, Enum):
    USERS = "users"
    QUESTIONS = "questions"
    COMMENTS = "comments"
    TAGS = "tags"
    VOTES = "votes"
    NOTIFICATIONS = "notifications"


class FilterKey(str, Enum):
    SEARCH = "search"
    ROLE = "role"
    AUTHOR_ID = "authorId"
    TAG_ID = "tagId"
    QUESTION_ID = "questionId"
    # Adapter-only keys used by analytics and actions; never accepted from callers.
    CREATED_SINCE = "createdSince"
    CREATED_BEFORE = "createdBefore"
    IS_READ = "isRead"


class SortField(str, Enum):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    TITLE = "title"
    VOTE_SCORE = "voteScore"
    QUESTION_COUNT = "questionCount"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class GroupKey(str, Enum):
    ROLE = "role"
    TAG = "tag"
    AUTHOR = "author"
    QUESTION = "question"


@dataclass(frozen=True)
class SortSpec:
    field: SortField
    order: SortOrder = SortOrder.DESC


LISTABLE_ENTITIES: Final[tuple[EntityType, ...]] = (
    EntityType.USERS,
    EntityType.QUESTIONS,
    EntityType.COMMENTS,
    EntityType.TAGS,
)

ALLOWED_FILTERS: Final[Mapping[EntityType, frozenset[FilterKey]]] = MappingProxyType(
    {
        EntityType.USERS: frozenset({FilterKey.SEARCH, FilterKey.ROLE}),
        EntityType.QUESTIONS: frozenset(
            {FilterKey.SEARCH, FilterKey.AUTHOR_ID, FilterKey.TAG_ID}
        ),
        EntityType.COMMENTS: frozenset(
            {FilterKey.SEARCH, FilterKey.AUTHOR_ID, FilterKey.QUESTION_ID}
        ),
        EntityType.TAGS: frozenset({FilterKey.SEARCH}),
    }
)

ALLOWED_SORTS: Final[Mapping[EntityType, frozenset[SortField]]] = MappingProxyType(
    {
        EntityType.USERS: frozenset(
            {SortField.CREATED_AT, SortField.NAME, SortField.EMAIL, SortField.ROLE}
        ),
        EntityType.QUESTIONS: frozenset(
            {
                SortField.CREATED_AT,
                SortField.UPDATED_AT,
                SortField.TITLE,
                SortField.VOTE_SCORE,
            }
        ),
        EntityType.COMMENTS: frozenset({SortField.CREATED_AT}),
        EntityType.TAGS: frozenset({SortField.NAME, SortField.QUESTION_COUNT}),
    }
)

DEFAULT_SORTS: Final[Mapping[EntityType, SortSpec]] = MappingProxyType(
    {
        EntityType.USERS: SortSpec(SortField.CREATED_AT, SortOrder.DESC),
        EntityType.QUESTIONS: SortSpec(SortField.CREATED_AT, SortOrder.DESC),
        EntityType.COMMENTS: SortSpec(SortField.CREATED_AT, SortOrder.DESC),
        EntityType.TAGS: SortSpec(SortField.NAME, SortOrder.ASC),
    }
)


class CascadeStage(str, Enum):
    """Ordered steps of a user removal; each one is safe to re-run."""

    VOTES = "votes"
    COMMENTS = "comments"
    QUESTIONS = "questions"
    NOTIFICATIONS = "notifications"
    USER = "user"


CASCADE_ORDER: Final[tuple[CascadeStage, ...]] = (
    CascadeStage.VOTES,
    CascadeStage.COMMENTS,
    CascadeStage.QUESTIONS,
    CascadeStage.NOTIFICATIONS,
    CascadeStage.USER,
)


@dataclass
class CascadeResult:
    """Rows removed per cascade stage for one or more users."""

    counts: dict[str, int] = field(
        default_factory=lambda: {stage.value: 0 for stage in CASCADE_ORDER}
    )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def merge(self, other: "CascadeResult") -> None:
        for stage, count in other.counts.items():
            self.counts[stage] = self.counts.get(stage, 0) + count


@dataclass(frozen=True)
class AdminContext:
    """Authorization context handed to every engine call by the identity layer."""

    actor_id: int | None
    is_admin: bool


__all__ = [
    "ALLOWED_FILTERS",
    "ALLOWED_SORTS",
    "AdminContext",
    "CASCADE_ORDER",
    "CascadeResult",
    "CascadeStage",
    "DEFAULT_SORTS",
    "EntityType",
    "FilterKey",
    "GroupKey",
    "LISTABLE_ENTITIES",
    "SortField",
    "SortOrder",
    "SortSpec",
]
