from .action import ActionRequest, ActionResultRead, SystemDiagnosticsRead, SystemReportRead
from .listing import (
    CommentRead,
    PageRead,
    QuestionAuthorRead,
    QuestionRead,
    TagRead,
    UserRead,
)
from .overview import (
    AdminOverviewRead,
    GrowthMetricRead,
    GrowthSummaryRead,
    QuestionScoreRead,
    RankedQuestionRead,
    RankedTagRead,
    RankedUserRead,
    RoleCountRead,
    SystemStatsRead,
    TagPopularityRead,
    UserActivityRead,
)

__all__ = [
    "ActionRequest",
    "ActionResultRead",
    "AdminOverviewRead",
    "CommentRead",
    "GrowthMetricRead",
    "GrowthSummaryRead",
    "PageRead",
    "QuestionAuthorRead",
    "QuestionRead",
    "QuestionScoreRead",
    "RankedQuestionRead",
    "RankedTagRead",
    "RankedUserRead",
    "RoleCountRead",
    "SystemDiagnosticsRead",
    "SystemReportRead",
    "SystemStatsRead",
    "TagPopularityRead",
    "TagRead",
    "UserActivityRead",
    "UserRead",
]
