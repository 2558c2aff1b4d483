"""Value objects describing administrative actions and their outcomes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from forum_admin.application.use_cases.analytics import AdminOverview


class ActionName(str, Enum):
    CLEAR_OLD_NOTIFICATIONS = "CLEAR_OLD_NOTIFICATIONS"
    DELETE_INACTIVE_USERS = "DELETE_INACTIVE_USERS"
    DELETE_USER = "DELETE_USER"
    GENERATE_SYSTEM_REPORT = "GENERATE_SYSTEM_REPORT"


# Names used by older dashboard clients.
ACTION_ALIASES: Mapping[str, ActionName] = {
    "CLEAR_NOTIFICATIONS": ActionName.CLEAR_OLD_NOTIFICATIONS,
}


class ActionStatus(str, Enum):
    COMPLETED = "completed"


@dataclass(frozen=True)
class AdminAction:
    """A named action submitted by an administrator."""

    name: str
    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class SystemDiagnostics:
    record_counts: dict[str, int]
    read_notifications: int
    unread_notifications: int
    never_active_users: int
    dormant_users: int
    backend: dict[str, Any]


@dataclass
class SystemReport:
    generated_at: datetime
    overview: "AdminOverview"
    diagnostics: SystemDiagnostics


@dataclass
class ActionResult:
    """Outcome of a completed action.

    ``affected`` counts the records changed by mutating actions and is 0 for
    read-only ones.
    """

    action: ActionName
    status: ActionStatus
    summary: str
    affected: int = 0
    details: dict[str, Any] = field(default_factory=dict)
    report: SystemReport | None = None


__all__ = [
    "ACTION_ALIASES",
    "ActionName",
    "ActionResult",
    "ActionStatus",
    "AdminAction",
    "SystemDiagnostics",
    "SystemReport",
]
