from fastapi import FastAPI

from .actions import router as actions_router
from .listings import router as listings_router
from .overview import router as overview_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application.

    The listing router goes last: its ``/admin/{entity_type}`` path would
    otherwise capture ``/admin/overview`` and ``/admin/actions``.
    """

    app.include_router(overview_router)
    app.include_router(actions_router)
    app.include_router(listings_router)
