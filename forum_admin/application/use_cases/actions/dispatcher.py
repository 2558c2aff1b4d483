"""Validate and execute named administrative actions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from forum_admin.application.use_cases.guards import require_admin
from forum_admin.domain.errors import PreconditionFailed, ValidationError
from forum_admin.domain.queries import AdminContext
from forum_admin.domain.repositories import ForumRepository
from forum_admin.utils import ensure_app_timezone, now_in_app_timezone

from .notifications import clear_old_notifications
from .report import generate_system_report
from .types import ACTION_ALIASES, ActionName, ActionResult, AdminAction
from .users import delete_inactive_users, delete_user

logger = logging.getLogger(__name__)

CONFIRM_PARAMETER = "confirm"

_MISSING = object()
_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})

Handler = Callable[[ForumRepository, AdminContext, dict[str, Any], datetime], ActionResult]
Parser = Callable[[str, Any], Any]


def _positive_int(default: Any = _MISSING) -> Parser:
    def parse(name: str, raw: Any) -> Any:
        if raw is _MISSING or raw is None:
            if default is _MISSING:
                raise ValidationError(
                    "MissingParameter", f"Parameter '{name}' is required", field=name
                )
            return default
        if isinstance(raw, bool):
            raise ValidationError(
                "InvalidParameter", f"Parameter '{name}' must be an integer", field=name
            )
        try:
            value = int(raw)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                "InvalidParameter", f"Parameter '{name}' must be an integer", field=name
            ) from exc
        if value < 1:
            raise ValidationError(
                "InvalidParameter", f"Parameter '{name}' must be at least 1", field=name
            )
        return value

    return parse


def _boolean(default: bool) -> Parser:
    def parse(name: str, raw: Any) -> bool:
        if raw is _MISSING or raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
            return raw.strip().lower() in _TRUE_STRINGS
        raise ValidationError(
            "InvalidParameter", f"Parameter '{name}' must be a boolean", field=name
        )

    return parse


def _is_confirmed(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return isinstance(raw, str) and raw.strip().lower() in _TRUE_STRINGS


@dataclass(frozen=True)
class ActionDefinition:
    """Handler plus the parameters an action accepts."""

    handler: Handler
    parameters: Mapping[str, Parser] = field(default_factory=dict)
    destructive: bool = False

    def validate(self, name: ActionName, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Return parsed parameters.

        An unconfirmed destructive action fails with :class:`PreconditionFailed`
        whatever else is wrong with the request.
        """

        if self.destructive and not _is_confirmed(raw.get(CONFIRM_PARAMETER)):
            raise PreconditionFailed(
                f"{name.value} is irreversible; resubmit with '{CONFIRM_PARAMETER}': true"
            )

        allowed = set(self.parameters)
        if self.destructive:
            allowed.add(CONFIRM_PARAMETER)
        unknown = sorted(str(key) for key in raw if key not in allowed)
        if unknown:
            raise ValidationError(
                "InvalidParameter",
                f"Unknown parameter(s) for {name.value}: {', '.join(unknown)}",
                field=unknown[0],
            )
        return {
            key: parser(key, raw.get(key, _MISSING)) for key, parser in self.parameters.items()
        }


ACTIONS: Mapping[ActionName, ActionDefinition] = {
    ActionName.CLEAR_OLD_NOTIFICATIONS: ActionDefinition(
        handler=clear_old_notifications,
        parameters={"olderThanDays": _positive_int(30)},
    ),
    ActionName.DELETE_INACTIVE_USERS: ActionDefinition(
        handler=delete_inactive_users,
        parameters={
            "inactiveDays": _positive_int(30),
            "includeDormant": _boolean(False),
        },
        destructive=True,
    ),
    ActionName.DELETE_USER: ActionDefinition(
        handler=delete_user,
        parameters={"userId": _positive_int()},
        destructive=True,
    ),
    ActionName.GENERATE_SYSTEM_REPORT: ActionDefinition(handler=generate_system_report),
}


def resolve_action_name(raw_name: str) -> ActionName:
    normalized = str(raw_name or "").strip().upper()
    if normalized in ACTION_ALIASES:
        return ACTION_ALIASES[normalized]
    try:
        return ActionName(normalized)
    except ValueError as exc:
        raise ValidationError(
            "InvalidAction", f"Unknown action '{raw_name}'", field="action"
        ) from exc


def dispatch_action(
    action: AdminAction,
    repository: ForumRepository,
    context: AdminContext,
    *,
    reference: datetime | None = None,
) -> ActionResult:
    """Validate ``action`` and run it once, synchronously.

    Validation and precondition failures are raised before the repository
    is touched. Repository errors propagate unchanged, or as
    :class:`PartialFailure` when a cascade stopped midway; nothing is retried.
    """

    require_admin(context)
    name = resolve_action_name(action.name)
    definition = ACTIONS[name]
    parameters = definition.validate(name, action.parameters or {})
    now = ensure_app_timezone(reference) or now_in_app_timezone()

    logger.info("Executing %s for actor %s with %s", name.value, context.actor_id, parameters)
    result = definition.handler(repository, context, parameters, now)
    logger.info("%s completed: %s", name.value, result.summary)
    return result


__all__ = ["ACTIONS", "ActionDefinition", "CONFIRM_PARAMETER", "dispatch_action", "resolve_action_name"]
