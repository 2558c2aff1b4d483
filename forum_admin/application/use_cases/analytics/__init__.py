"""Use cases for dashboard statistics, growth trends and rankings."""

from .growth import GROWTH_WINDOW_DAYS, GrowthMetric, compute_growth
from .overview import (
    AdminOverview,
    GrowthSummary,
    RoleCount,
    SystemStats,
    collect_overview,
    get_overview,
)
from .ranking import (
    ACTIVITY_WEIGHTS,
    ActivityWeights,
    QuestionScore,
    RankedEntry,
    TOP_N,
    TagPopularity,
    UserActivity,
    rank_entries,
    rank_questions,
    rank_tags,
    rank_users,
)

__all__ = [
    "ACTIVITY_WEIGHTS",
    "ActivityWeights",
    "AdminOverview",
    "GROWTH_WINDOW_DAYS",
    "GrowthMetric",
    "GrowthSummary",
    "QuestionScore",
    "RankedEntry",
    "RoleCount",
    "SystemStats",
    "TOP_N",
    "TagPopularity",
    "UserActivity",
    "collect_overview",
    "compute_growth",
    "get_overview",
    "rank_entries",
    "rank_questions",
    "rank_tags",
    "rank_users",
]
