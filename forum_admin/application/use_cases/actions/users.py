"""Cascading removal of forum users."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from forum_admin.domain.errors import (
    NotFound,
    PartialFailure,
    PreconditionFailed,
    RepositoryUnavailable,
)
from forum_admin.domain.queries import AdminContext, CascadeResult, CascadeStage, EntityType
from forum_admin.domain.repositories import ForumRepository
from forum_admin.utils import days_before

from .types import ActionName, ActionResult, ActionStatus

logger = logging.getLogger(__name__)


def cascade_delete_users(
    repository: ForumRepository, user_ids: Iterable[int]
) -> tuple[CascadeResult, list[int]]:
    """Remove each user with its dependent rows, one user per adapter call.

    Users are processed in the given order. When a cascade step fails, the
    users already removed stay removed, the failing one is rolled back by the
    adapter and :class:`PartialFailure` reports where processing stopped.
    """

    totals = CascadeResult()
    completed: list[int] = []
    for user_id in user_ids:
        try:
            outcome = repository.delete_cascade(user_id)
        except RepositoryUnavailable as exc:
            stage = exc.stage or "unknown"
            logger.error(
                "Cascade stopped at user %s stage %s after %s users",
                user_id,
                stage,
                len(completed),
            )
            raise PartialFailure(
                f"Deleting user {user_id} failed at stage '{stage}'; "
                f"{len(completed)} users were fully removed before the failure",
                stage=stage,
                user_id=user_id,
                completed=completed,
                affected=totals.counts,
            ) from exc
        totals.merge(outcome)
        completed.append(user_id)
    return totals, completed


def delete_inactive_users(
    repository: ForumRepository,
    context: AdminContext,
    parameters: dict[str, Any],
    now: datetime,
) -> ActionResult:
    inactive_days = parameters["inactiveDays"]
    include_dormant = parameters["includeDormant"]
    cutoff = days_before(now, inactive_days)

    candidates = [
        user_id
        for user_id in repository.find_inactive_user_ids(
            cutoff, include_dormant=include_dormant
        )
        if user_id != context.actor_id
    ]
    totals, deleted = cascade_delete_users(repository, candidates)

    predicate = "no activity since the cutoff" if include_dormant else "no activity ever"
    return ActionResult(
        action=ActionName.DELETE_INACTIVE_USERS,
        status=ActionStatus.COMPLETED,
        summary=(
            f"Deleted {len(deleted)} users created more than {inactive_days} days ago "
            f"with {predicate}"
        ),
        affected=totals.total,
        details={
            "cutoff": cutoff.isoformat(),
            "includeDormant": include_dormant,
            "deletedUserIds": deleted,
            "counts": dict(totals.counts),
        },
    )


def delete_user(
    repository: ForumRepository,
    context: AdminContext,
    parameters: dict[str, Any],
    now: datetime,  # noqa: ARG001
) -> ActionResult:
    user_id = parameters["userId"]
    if context.actor_id is not None and user_id == context.actor_id:
        raise PreconditionFailed("Administrators cannot delete their own account")
    if user_id not in repository.get_many(EntityType.USERS, [user_id]):
        raise NotFound(f"User {user_id} not found")

    totals, _ = cascade_delete_users(repository, [user_id])
    related = totals.total - totals.counts[CascadeStage.USER.value]
    return ActionResult(
        action=ActionName.DELETE_USER,
        status=ActionStatus.COMPLETED,
        summary=f"Deleted user {user_id} and {related} related records",
        affected=totals.total,
        details={"userId": user_id, "counts": dict(totals.counts)},
    )


__all__ = ["cascade_delete_users", "delete_inactive_users", "delete_user"]
