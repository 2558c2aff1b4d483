"""Schemas for paginated entity listings."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    email: str
    role: str
    image: str | None
    created_at: datetime | None
    question_count: int = Field(..., description="Questions asked by the user")
    comment_count: int = Field(..., description="Comments written by the user")
    vote_count: int = Field(..., description="Votes cast by the user")


class QuestionAuthorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    email: str
    image: str | None = None


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    question_count: int = 0


class QuestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    image_url: str | None
    author: QuestionAuthorRead | None
    created_at: datetime | None
    updated_at: datetime | None
    tags: list[TagRead]
    comment_count: int
    vote_count: int = Field(..., description="Number of votes cast on the question")
    vote_score: int = Field(..., description="Upvotes minus downvotes")


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    author_id: int
    question_id: int
    created_at: datetime | None


class PageRead(BaseModel):
    """One page of a listing together with its navigation metadata."""

    entity_type: str
    items: list[dict[str, Any]]
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)
    page_size: int = Field(..., ge=1, le=100)
    has_next: bool
    has_prev: bool


__all__ = [
    "CommentRead",
    "PageRead",
    "QuestionAuthorRead",
    "QuestionRead",
    "TagRead",
    "UserRead",
]
