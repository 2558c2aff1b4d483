"""Purge of read notifications past their retention period."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from forum_admin.domain.queries import AdminContext, EntityType, FilterKey
from forum_admin.domain.repositories import ForumRepository
from forum_admin.utils import days_before

from .types import ActionName, ActionResult, ActionStatus


def clear_old_notifications(
    repository: ForumRepository,
    context: AdminContext,  # noqa: ARG001
    parameters: dict[str, Any],
    now: datetime,
) -> ActionResult:
    """Delete read notifications created before the cutoff.

    Re-running the action once nothing qualifies completes with 0 affected.
    """

    older_than_days = parameters["olderThanDays"]
    cutoff = days_before(now, older_than_days)
    removed = repository.delete_where(
        EntityType.NOTIFICATIONS,
        {FilterKey.IS_READ: True, FilterKey.CREATED_BEFORE: cutoff},
    )
    return ActionResult(
        action=ActionName.CLEAR_OLD_NOTIFICATIONS,
        status=ActionStatus.COMPLETED,
        summary=(
            f"Removed {removed} read notifications older than {older_than_days} days"
        ),
        affected=removed,
        details={"cutoff": cutoff.isoformat(), "olderThanDays": older_than_days},
    )


__all__ = ["clear_old_notifications"]
