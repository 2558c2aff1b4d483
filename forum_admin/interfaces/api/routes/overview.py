"""Routes exposing the administrative dashboard snapshot."""

from fastapi import APIRouter, Depends

from forum_admin.application.use_cases.actions import AdminAction
from forum_admin.application.use_cases.analytics import get_overview
from forum_admin.domain.errors import AdminEngineError
from forum_admin.domain.queries import AdminContext
from forum_admin.domain.repositories import ForumRepository
from forum_admin.interfaces.api.dependencies import get_admin_context, get_repository
from forum_admin.interfaces.api.routes_helpers import run_admin_action, to_http_exception
from forum_admin.interfaces.api.schemas import (
    ActionRequest,
    ActionResultRead,
    AdminOverviewRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview", response_model=AdminOverviewRead)
def read_overview(
    repository: ForumRepository = Depends(get_repository),
    context: AdminContext = Depends(get_admin_context),
) -> AdminOverviewRead:
    """Return statistics, growth and rankings computed from one snapshot."""

    try:
        overview = get_overview(repository, context)
    except AdminEngineError as exc:
        raise to_http_exception(exc) from exc
    return AdminOverviewRead.model_validate(overview)


@router.post("/overview", response_model=ActionResultRead)
def run_overview_action(
    payload: ActionRequest,
    repository: ForumRepository = Depends(get_repository),
    context: AdminContext = Depends(get_admin_context),
) -> ActionResultRead:
    """Run an action submitted from the dashboard's action tab."""

    result = run_admin_action(
        AdminAction(name=payload.action, parameters=payload.parameters),
        repository,
        context,
    )
    return ActionResultRead.model_validate(result)


__all__ = ["router"]
