"""Period-over-period growth figures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

GROWTH_WINDOW_DAYS: Final[int] = 30


@dataclass(frozen=True)
class GrowthMetric:
    """Growth of an entity over the trailing window.

    ``percentage`` compares the records created inside the window with the
    ones that existed before it. The divisor is floored at 1, so when every
    record is recent the figure degenerates to ``recent_count * 100``
    (50 of 50 reports 5000.0) instead of dividing by zero.
    """

    total_count: int
    recent_count: int
    percentage: float


def compute_growth(total_count: int, recent_count: int) -> GrowthMetric:
    total = max(int(total_count), 0)
    recent = max(int(recent_count), 0)
    previous = max(total - recent, 1)
    return GrowthMetric(
        total_count=total,
        recent_count=recent,
        percentage=round(recent / previous * 100, 1),
    )


__all__ = ["GROWTH_WINDOW_DAYS", "GrowthMetric", "compute_growth"]
