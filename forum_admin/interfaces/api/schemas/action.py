"""Schemas for administrative action requests and results."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from forum_admin.application.use_cases.actions import ActionName, ActionStatus

from .overview import AdminOverviewRead


class ActionRequest(BaseModel):
    """Named action plus its parameters (``data`` is accepted as an alias)."""

    model_config = ConfigDict(extra="forbid")

    action: str = Field(..., min_length=1)
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("parameters", "data"),
    )


class SystemDiagnosticsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    record_counts: dict[str, int]
    read_notifications: int
    unread_notifications: int
    never_active_users: int
    dormant_users: int
    backend: dict[str, Any]


class SystemReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    generated_at: datetime
    overview: AdminOverviewRead
    diagnostics: SystemDiagnosticsRead


class ActionResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action: ActionName
    status: ActionStatus
    summary: str
    affected: int = Field(..., ge=0)
    details: dict[str, Any]
    report: SystemReportRead | None = None


__all__ = [
    "ActionRequest",
    "ActionResultRead",
    "SystemDiagnosticsRead",
    "SystemReportRead",
]
