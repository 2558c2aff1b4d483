"""Use cases for named bulk administrative actions."""

from .dispatcher import ACTIONS, CONFIRM_PARAMETER, dispatch_action, resolve_action_name
from .types import (
    ACTION_ALIASES,
    ActionName,
    ActionResult,
    ActionStatus,
    AdminAction,
    SystemDiagnostics,
    SystemReport,
)
from .users import cascade_delete_users

__all__ = [
    "ACTIONS",
    "ACTION_ALIASES",
    "ActionName",
    "ActionResult",
    "ActionStatus",
    "AdminAction",
    "CONFIRM_PARAMETER",
    "SystemDiagnostics",
    "SystemReport",
    "cascade_delete_users",
    "dispatch_action",
    "resolve_action_name",
]
