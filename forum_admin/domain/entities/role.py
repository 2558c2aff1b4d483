"""Closed set of roles that can be assigned to a forum user."""

from typing import Final

ROLE_USER: Final[str] = "USER"
ROLE_ADMIN: Final[str] = "ADMIN"

ROLES: Final[tuple[str, ...]] = (ROLE_USER, ROLE_ADMIN)


__all__ = ["ROLE_ADMIN", "ROLE_USER", "ROLES"]
