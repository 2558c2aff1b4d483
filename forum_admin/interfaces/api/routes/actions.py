"""Routes for executing named administrative actions."""

from fastapi import APIRouter, Depends

from forum_admin.application.use_cases.actions import ACTIONS, AdminAction
from forum_admin.application.use_cases.guards import require_admin
from forum_admin.domain.errors import AdminEngineError
from forum_admin.domain.queries import AdminContext
from forum_admin.domain.repositories import ForumRepository
from forum_admin.interfaces.api.dependencies import get_admin_context, get_repository
from forum_admin.interfaces.api.routes_helpers import run_admin_action, to_http_exception
from forum_admin.interfaces.api.schemas import ActionRequest, ActionResultRead

router = APIRouter(prefix="/admin/actions", tags=["admin"])


@router.get("", response_model=list[str])
def list_actions(context: AdminContext = Depends(get_admin_context)) -> list[str]:
    """Return the names of the supported actions."""

    try:
        require_admin(context)
    except AdminEngineError as exc:
        raise to_http_exception(exc) from exc
    return [name.value for name in ACTIONS]


@router.post("", response_model=ActionResultRead)
def run_action(
    payload: ActionRequest,
    repository: ForumRepository = Depends(get_repository),
    context: AdminContext = Depends(get_admin_context),
) -> ActionResultRead:
    """Validate and execute ``payload.action`` once."""

    result = run_admin_action(
        AdminAction(name=payload.action, parameters=payload.parameters),
        repository,
        context,
    )
    return ActionResultRead.model_validate(result)


__all__ = ["router"]
