"""Schemas for the administrative overview."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SystemStatsRead(_ReadModel):
    total_users: int
    total_questions: int
    total_comments: int
    total_votes: int
    total_tags: int
    unread_notifications: int


class GrowthMetricRead(_ReadModel):
    total_count: int = Field(..., description="Records that exist today")
    recent_count: int = Field(..., description="Records created in the last 30 days")
    percentage: float = Field(
        ..., description="Recent records relative to the older ones, one decimal"
    )


class GrowthSummaryRead(_ReadModel):
    users: GrowthMetricRead
    questions: GrowthMetricRead
    comments: GrowthMetricRead


class TagPopularityRead(_ReadModel):
    id: int
    name: str
    question_count: int


class RankedTagRead(_ReadModel):
    subject: TagPopularityRead
    score: float
    rank: int = Field(..., ge=1)


class RoleCountRead(_ReadModel):
    role: str
    count: int


class QuestionScoreRead(_ReadModel):
    question_id: int
    title: str | None
    total_votes: int = Field(..., description="Net vote score")
    vote_count: int = Field(..., description="Number of votes cast")


class RankedQuestionRead(_ReadModel):
    subject: QuestionScoreRead
    score: float
    rank: int = Field(..., ge=1)


class UserActivityRead(_ReadModel):
    id: int
    name: str | None
    email: str | None
    image: str | None
    role: str | None
    question_count: int
    comment_count: int
    vote_count: int
    total_activity: int = Field(
        ..., description="Weighted score: 3 per question, 2 per comment, 1 per vote"
    )


class RankedUserRead(_ReadModel):
    subject: UserActivityRead
    score: float
    rank: int = Field(..., ge=1)


class AdminOverviewRead(_ReadModel):
    generated_at: datetime
    stats: SystemStatsRead
    growth: GrowthSummaryRead
    top_tags: list[RankedTagRead]
    user_role_distribution: list[RoleCountRead]
    top_questions: list[RankedQuestionRead]
    most_active_users: list[RankedUserRead]


__all__ = [
    "AdminOverviewRead",
    "GrowthMetricRead",
    "GrowthSummaryRead",
    "QuestionScoreRead",
    "RankedQuestionRead",
    "RankedTagRead",
    "RankedUserRead",
    "RoleCountRead",
    "SystemStatsRead",
    "TagPopularityRead",
    "UserActivityRead",
]
