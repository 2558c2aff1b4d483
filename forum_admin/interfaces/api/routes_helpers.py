"""Helper utilities shared across API route handlers."""

import logging

from fastapi import HTTPException, status

from forum_admin.application.use_cases.actions import (
    ActionResult,
    AdminAction,
    dispatch_action,
)
from forum_admin.domain.errors import (
    AdminEngineError,
    NotAuthorized,
    NotFound,
    PartialFailure,
    PreconditionFailed,
    RepositoryUnavailable,
    ValidationError,
)
from forum_admin.domain.queries import AdminContext
from forum_admin.domain.repositories import ForumRepository

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[AdminEngineError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthorized, status.HTTP_403_FORBIDDEN),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (PreconditionFailed, status.HTTP_412_PRECONDITION_FAILED),
    (PartialFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (RepositoryUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(exc: AdminEngineError) -> HTTPException:
    """Return the HTTP error carrying the engine failure details."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.to_dict())
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.to_dict()
    )


def run_admin_action(
    action: AdminAction, repository: ForumRepository, context: AdminContext
) -> ActionResult:
    """Dispatch ``action`` and translate engine failures into HTTP errors."""

    try:
        return dispatch_action(action, repository, context)
    except PartialFailure as exc:
        logger.warning("Action %s stopped at stage %s", action.name, exc.stage)
        raise to_http_exception(exc) from exc
    except AdminEngineError as exc:
        raise to_http_exception(exc) from exc


__all__ = ["run_admin_action", "to_http_exception"]
