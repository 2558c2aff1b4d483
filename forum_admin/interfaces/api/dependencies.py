"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from forum_admin.domain.entities import ROLE_ADMIN
from forum_admin.domain.queries import AdminContext
from forum_admin.domain.repositories import ForumRepository
from forum_admin.infrastructure.database import get_db
from forum_admin.infrastructure.repositories import SqlAlchemyForumRepository
from forum_admin.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_repository(db: Session = Depends(get_db)) -> ForumRepository:
    """Return the repository adapter bound to the request session."""

    return SqlAlchemyForumRepository(db)


def get_admin_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdminContext:
    """Translate the identity service's bearer token into an :class:`AdminContext`.

    Only the token signature is checked here; whether the caller may act as
    an administrator is decided by the engine from ``is_admin``.
    """

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    if subject is None:
        raise _unauthorized()

    try:
        actor_id = int(subject)
    except (TypeError, ValueError):
        actor_id = None

    role = str(payload.get("role") or "").upper()
    return AdminContext(
        actor_id=actor_id,
        is_admin=role == ROLE_ADMIN,
    )
