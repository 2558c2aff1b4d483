"""Use case for computing the administrative dashboard snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime

from forum_admin.application.use_cases.guards import require_admin
from forum_admin.domain.entities import ROLES
from forum_admin.domain.errors import RepositoryUnavailable
from forum_admin.domain.queries import AdminContext, EntityType, FilterKey, GroupKey
from forum_admin.domain.repositories import ForumRepository
from forum_admin.utils import days_before, ensure_app_timezone, now_in_app_timezone

from .growth import GROWTH_WINDOW_DAYS, GrowthMetric, compute_growth
from .ranking import (
    ACTIVITY_WEIGHTS,
    QuestionScore,
    RankedEntry,
    TagPopularity,
    UserActivity,
    rank_questions,
    rank_tags,
    rank_users,
)

logger = logging.getLogger(__name__)


@dataclass
class SystemStats:
    """Plain record totals."""

    total_users: int
    total_questions: int
    total_comments: int
    total_votes: int
    total_tags: int
    unread_notifications: int


@dataclass
class GrowthSummary:
    users: GrowthMetric
    questions: GrowthMetric
    comments: GrowthMetric


@dataclass
class RoleCount:
    role: str
    count: int


@dataclass
class AdminOverview:
    """Aggregate view backing the administrative dashboard."""

    generated_at: datetime
    stats: SystemStats
    growth: GrowthSummary
    top_tags: list[RankedEntry[TagPopularity]]
    user_role_distribution: list[RoleCount]
    top_questions: list[RankedEntry[QuestionScore]]
    most_active_users: list[RankedEntry[UserActivity]]


@contextmanager
def _section(name: str) -> Iterator[None]:
    """Tag repository failures with the dashboard section being computed."""

    try:
        yield
    except RepositoryUnavailable as exc:
        logger.error("Overview section %s failed: %s", name, exc.message)
        raise exc.with_stage(name) from exc


def get_overview(
    repository: ForumRepository,
    context: AdminContext,
    *,
    reference: datetime | None = None,
) -> AdminOverview:
    """Compute every dashboard figure from one repository snapshot.

    Any failing section fails the whole call; a partially filled dashboard
    is never returned.
    """

    require_admin(context)
    with repository.snapshot():
        return collect_overview(repository, reference=reference)


def collect_overview(
    repository: ForumRepository, *, reference: datetime | None = None
) -> AdminOverview:
    """Compute the overview inside a snapshot opened by the caller."""

    now = ensure_app_timezone(reference) or now_in_app_timezone()

    with _section("stats"):
        stats = SystemStats(
            total_users=repository.count(EntityType.USERS),
            total_questions=repository.count(EntityType.QUESTIONS),
            total_comments=repository.count(EntityType.COMMENTS),
            total_votes=repository.count(EntityType.VOTES),
            total_tags=repository.count(EntityType.TAGS),
            unread_notifications=repository.count(
                EntityType.NOTIFICATIONS, {FilterKey.IS_READ: False}
            ),
        )

    with _section("growth"):
        growth = _growth(repository, stats, now)

    with _section("topTags"):
        top_tags = _top_tags(repository)

    with _section("userRoleDistribution"):
        by_role = repository.aggregate_count(EntityType.USERS, GroupKey.ROLE)
        role_distribution = [RoleCount(role=role, count=by_role.get(role, 0)) for role in ROLES]

    with _section("topQuestions"):
        top_questions = _top_questions(repository)

    with _section("mostActiveUsers"):
        most_active = _most_active_users(repository)

    return AdminOverview(
        generated_at=now,
        stats=stats,
        growth=growth,
        top_tags=top_tags,
        user_role_distribution=role_distribution,
        top_questions=top_questions,
        most_active_users=most_active,
    )


def _growth(repository: ForumRepository, stats: SystemStats, now: datetime) -> GrowthSummary:
    since = {FilterKey.CREATED_SINCE: days_before(now, GROWTH_WINDOW_DAYS)}
    return GrowthSummary(
        users=compute_growth(stats.total_users, repository.count(EntityType.USERS, since)),
        questions=compute_growth(
            stats.total_questions, repository.count(EntityType.QUESTIONS, since)
        ),
        comments=compute_growth(
            stats.total_comments, repository.count(EntityType.COMMENTS, since)
        ),
    )


def _top_tags(repository: ForumRepository) -> list[RankedEntry[TagPopularity]]:
    question_counts = repository.aggregate_count(EntityType.QUESTIONS, GroupKey.TAG)
    tags = repository.get_many(EntityType.TAGS, repository.list_ids(EntityType.TAGS))
    return rank_tags(
        TagPopularity(id=tag.id, name=tag.name, question_count=question_counts.get(tag.id, 0))
        for tag in tags.values()
    )


def _top_questions(repository: ForumRepository) -> list[RankedEntry[QuestionScore]]:
    scores = repository.aggregate_sum(EntityType.VOTES, GroupKey.QUESTION)
    vote_counts = repository.aggregate_count(EntityType.VOTES, GroupKey.QUESTION)
    ranked = rank_questions(
        QuestionScore(
            question_id=question_id,
            title=None,
            total_votes=scores.get(question_id, 0),
            vote_count=count,
        )
        for question_id, count in vote_counts.items()
    )
    questions = repository.get_many(
        EntityType.QUESTIONS, [entry.subject.question_id for entry in ranked]
    )
    return [
        replace(
            entry,
            subject=replace(
                entry.subject,
                title=getattr(questions.get(entry.subject.question_id), "title", None),
            ),
        )
        for entry in ranked
    ]


def _most_active_users(repository: ForumRepository) -> list[RankedEntry[UserActivity]]:
    questions = repository.aggregate_count(EntityType.QUESTIONS, GroupKey.AUTHOR)
    comments = repository.aggregate_count(EntityType.COMMENTS, GroupKey.AUTHOR)
    votes = repository.aggregate_count(EntityType.VOTES, GroupKey.AUTHOR)

    candidates = []
    for user_id in repository.list_ids(EntityType.USERS):
        question_count = questions.get(user_id, 0)
        comment_count = comments.get(user_id, 0)
        vote_count = votes.get(user_id, 0)
        candidates.append(
            UserActivity(
                id=user_id,
                name=None,
                email=None,
                image=None,
                role=None,
                question_count=question_count,
                comment_count=comment_count,
                vote_count=vote_count,
                total_activity=ACTIVITY_WEIGHTS.score(
                    question_count, comment_count, vote_count
                ),
            )
        )

    ranked = rank_users(candidates)
    users = repository.get_many(EntityType.USERS, [entry.subject.id for entry in ranked])
    enriched = []
    for entry in ranked:
        user = users.get(entry.subject.id)
        if user is not None:
            entry = replace(
                entry,
                subject=replace(
                    entry.subject,
                    name=user.name,
                    email=user.email,
                    image=user.image,
                    role=user.role,
                ),
            )
        enriched.append(entry)
    return enriched


__all__ = [
    "AdminOverview",
    "GrowthSummary",
    "RoleCount",
    "SystemStats",
    "collect_overview",
    "get_overview",
]
