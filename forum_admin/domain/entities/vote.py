"""Domain entity representing a vote on a question."""

from dataclasses import dataclass
from datetime import datetime
from typing import Final

UPVOTE: Final[int] = 1
DOWNVOTE: Final[int] = -1


@dataclass
class Vote:
    """A single up (``+1``) or down (``-1``) vote cast by a user."""

    id: int
    user_id: int
    question_id: int
    value: int
    created_at: datetime | None


__all__ = ["DOWNVOTE", "UPVOTE", "Vote"]
