"""Domain entity representing a question posted to the forum."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .tag import Tag


@dataclass
class QuestionAuthor:
    """Minimal author projection embedded in question listings."""

    id: int
    name: str | None
    email: str
    image: str | None = None


@dataclass
class Question:
    """A question together with its derived participation figures.

    ``vote_score`` is the net score (upvotes minus downvotes) while
    ``vote_count`` is the raw number of votes cast on the question.
    """

    id: int
    title: str
    content: str
    image_url: str | None
    author: QuestionAuthor | None
    created_at: datetime | None
    updated_at: datetime | None
    tags: list[Tag] = field(default_factory=list)
    comment_count: int = 0
    vote_count: int = 0
    vote_score: int = 0


__all__ = ["Question", "QuestionAuthor"]
