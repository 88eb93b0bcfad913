"""
Analytics models for goal performance statistics.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from pydantic import BaseModel


class PerformanceSummary(BaseModel):
    """Counts behind the performance chart."""

    total: int
    finished: int
    discarded: int
    not_finished: int
