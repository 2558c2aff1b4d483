"""Deterministic top-N rankings and the composite activity score."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar

T = TypeVar("T")

TOP_N: Final[int] = 10


@dataclass(frozen=True)
class ActivityWeights:
    """Weights of the composite activity score.

    Asking a question is the most valuable contribution, then commenting,
    then voting.
    """

    question: int = 3
    comment: int = 2
    vote: int = 1

    def score(self, question_count: int, comment_count: int, vote_count: int) -> int:
        return (
            question_count * self.question
            + comment_count * self.comment
            + vote_count * self.vote
        )


ACTIVITY_WEIGHTS: Final[ActivityWeights] = ActivityWeights()


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    subject: T
    score: float
    rank: int


@dataclass(frozen=True)
class TagPopularity:
    id: int
    name: str
    question_count: int


@dataclass(frozen=True)
class QuestionScore:
    """Net vote score (``total_votes``) and raw participation of a question."""

    question_id: int
    title: str | None
    total_votes: int
    vote_count: int


@dataclass(frozen=True)
class UserActivity:
    id: int
    name: str | None
    email: str | None
    image: str | None
    role: str | None
    question_count: int
    comment_count: int
    vote_count: int
    total_activity: int


def rank_entries(
    subjects: Iterable[T],
    *,
    sort_key: Callable[[T], Any],
    score: Callable[[T], float],
    limit: int = TOP_N,
) -> list[RankedEntry[T]]:
    """Sort ``subjects`` by ``sort_key`` and assign dense ranks ``1..N``.

    ``sort_key`` must end with a unique identifier so equal scores always
    come back in the same order.
    """

    ordered = sorted(subjects, key=sort_key)[: max(limit, 0)]
    return [
        RankedEntry(subject=subject, score=score(subject), rank=position)
        for position, subject in enumerate(ordered, start=1)
    ]


def rank_tags(tags: Iterable[TagPopularity], limit: int = TOP_N) -> list[RankedEntry[TagPopularity]]:
    return rank_entries(
        tags,
        sort_key=lambda tag: (-tag.question_count, tag.name, tag.id),
        score=lambda tag: tag.question_count,
        limit=limit,
    )


def rank_questions(
    questions: Iterable[QuestionScore], limit: int = TOP_N
) -> list[RankedEntry[QuestionScore]]:
    return rank_entries(
        questions,
        sort_key=lambda item: (-item.total_votes, -item.vote_count, item.question_id),
        score=lambda item: item.total_votes,
        limit=limit,
    )


def rank_users(
    users: Iterable[UserActivity], limit: int = TOP_N
) -> list[RankedEntry[UserActivity]]:
    return rank_entries(
        users,
        sort_key=lambda user: (-user.total_activity, user.id),
        score=lambda user: user.total_activity,
        limit=limit,
    )


__all__ = [
    "ACTIVITY_WEIGHTS",
    "ActivityWeights",
    "QuestionScore",
    "RankedEntry",
    "TOP_N",
    "TagPopularity",
    "UserActivity",
    "rank_entries",
    "rank_questions",
    "rank_tags",
    "rank_users",
]
