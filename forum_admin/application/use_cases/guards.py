"""Authorization guard shared by every administrative use case."""

from forum_admin.domain.errors import NotAuthorized
from forum_admin.domain.queries import AdminContext


def require_admin(context: AdminContext) -> AdminContext:
    """Ensure the caller context carries administrator privileges."""

    if context is None or not context.is_admin:
        raise NotAuthorized("Administrator privileges are required")
    return context


__all__ = ["require_admin"]
