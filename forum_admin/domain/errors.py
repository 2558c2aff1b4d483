"""Error taxonomy raised by the administrative engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


class AdminEngineError(Exception):
    """Base class for every failure surfaced by the engine."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": type(self).__name__, "message": self.message}


class ValidationError(AdminEngineError):
    """Caller supplied an unknown or malformed parameter."""

    def __init__(self, code: str, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["code"] = self.code
        if self.field is not None:
            data["field"] = self.field
        return data


class NotFound(AdminEngineError):
    """A referenced entity does not exist."""


class PreconditionFailed(AdminEngineError):
    """A destructive action was submitted without its required guard."""


class NotAuthorized(AdminEngineError):
    """The caller context does not carry administrator privileges."""


class RepositoryUnavailable(AdminEngineError):
    """The backing store failed while serving ``operation``.

    ``stage`` is filled in by the engine when the failing call belongs to a
    larger unit of work (an overview section or a cascade step).
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        entity: str | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.entity = entity
        self.stage = stage

    def with_stage(self, stage: str) -> "RepositoryUnavailable":
        return RepositoryUnavailable(
            f"{stage}: {self.message}",
            operation=self.operation,
            entity=self.entity,
            stage=stage,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(operation=self.operation, entity=self.entity, stage=self.stage)
        return data


class PartialFailure(AdminEngineError):
    """A cascading action stopped before processing every target.

    Everything listed in ``completed`` was fully removed and ``affected``
    holds the counts for that work. The failing target was rolled back, so
    re-submitting the action resumes where it stopped.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str,
        user_id: int | None,
        completed: Sequence[int],
        affected: Mapping[str, int],
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.user_id = user_id
        self.completed = list(completed)
        self.affected = dict(affected)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            stage=self.stage,
            user_id=self.user_id,
            completed=self.completed,
            affected=self.affected,
        )
        return data


__all__ = [
    "AdminEngineError",
    "NotAuthorized",
    "NotFound",
    "PartialFailure",
    "PreconditionFailed",
    "RepositoryUnavailable",
    "ValidationError",
]
