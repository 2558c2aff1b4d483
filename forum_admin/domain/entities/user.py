"""Domain entity representing a forum user."""

from dataclasses import dataclass
from datetime import datetime

from .role import ROLE_ADMIN


@dataclass
class User:
    """Core attributes describing a forum member plus contribution counters."""

    id: int
    name: str | None
    email: str
    role: str
    image: str | None
    created_at: datetime | None
    question_count: int = 0
    comment_count: int = 0
    vote_count: int = 0

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role == ROLE_ADMIN


__all__ = ["User"]
