"""
Goal performance statistics.
"""

from collections.abc import Iterable

from ..models.analytics import PerformanceSummary
from ..models.goals import Goal, GoalStatus


def summarize_performance(goals: Iterable[Goal]) -> PerformanceSummary:
    """Count goals per lifecycle state."""
    counts = {s: 0 for s in GoalStatus}
    for goal in goals:
        counts[goal.status] += 1

    return PerformanceSummary(
        total=sum(counts.values()),
        finished=counts[GoalStatus.FINISHED],
        discarded=counts[GoalStatus.DISCARDED],
        not_finished=counts[GoalStatus.ACTIVE],
    )
