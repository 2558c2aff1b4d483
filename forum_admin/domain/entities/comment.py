"""Domain entity representing a comment left on a question."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    id: int
    content: str
    author_id: int
    question_id: int
    created_at: datetime | None


__all__ = ["Comment"]
