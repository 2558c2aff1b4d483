"""Routes for filtered, sorted and paginated entity listings."""

from fastapi import APIRouter, Depends, Request

from forum_admin.application.use_cases.queries import Page, list_records
from forum_admin.domain.errors import AdminEngineError
from forum_admin.domain.queries import AdminContext, EntityType
from forum_admin.domain.repositories import ForumRepository
from forum_admin.interfaces.api.dependencies import get_admin_context, get_repository
from forum_admin.interfaces.api.routes_helpers import to_http_exception
from forum_admin.interfaces.api.schemas import (
    CommentRead,
    PageRead,
    QuestionRead,
    TagRead,
    UserRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])

PAGE_PARAMETER = "page"
PAGE_SIZE_PARAMETERS = ("pageSize", "limit")
SORT_FIELD_PARAMETER = "sortBy"
SORT_ORDER_PARAMETER = "sortOrder"
_RESERVED_PARAMETERS = frozenset(
    {PAGE_PARAMETER, SORT_FIELD_PARAMETER, SORT_ORDER_PARAMETER, *PAGE_SIZE_PARAMETERS}
)

_ITEM_MODELS = {
    EntityType.USERS: UserRead,
    EntityType.QUESTIONS: QuestionRead,
    EntityType.COMMENTS: CommentRead,
    EntityType.TAGS: TagRead,
}


def _page_to_read_model(entity_type: EntityType, page: Page) -> PageRead:
    item_model = _ITEM_MODELS[entity_type]
    return PageRead(
        entity_type=entity_type.value,
        items=[item_model.model_validate(item).model_dump(mode="json") for item in page.items],
        current_page=page.current_page,
        total_pages=page.total_pages,
        total_count=page.total_count,
        page_size=page.page_size,
        has_next=page.has_next,
        has_prev=page.has_prev,
    )


@router.get("/{entity_type}", response_model=PageRead)
def list_entities(
    entity_type: str,
    request: Request,
    repository: ForumRepository = Depends(get_repository),
    context: AdminContext = Depends(get_admin_context),
) -> PageRead:
    """List ``entity_type`` records.

    ``page``, ``pageSize`` (or ``limit``), ``sortBy`` and ``sortOrder`` shape
    the window; every other query parameter is treated as a filter key and
    rejected when the entity does not support it.
    """

    params = request.query_params
    page_size = next(
        (params[name] for name in PAGE_SIZE_PARAMETERS if name in params), None
    )
    filters = {key: value for key, value in params.items() if key not in _RESERVED_PARAMETERS}

    try:
        page = list_records(
            repository,
            context,
            entity_type,
            filters=filters,
            sort_by=params.get(SORT_FIELD_PARAMETER),
            sort_order=params.get(SORT_ORDER_PARAMETER),
            page=params.get(PAGE_PARAMETER),
            page_size=page_size,
        )
    except AdminEngineError as exc:
        raise to_http_exception(exc) from exc
    return _page_to_read_model(EntityType(entity_type), page)


__all__ = ["router"]
