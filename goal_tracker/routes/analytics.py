"""
Analytics routes.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from fastapi import APIRouter

from ..dependencies import StoreDep
from ..models.analytics import PerformanceSummary
from ..services import goal_service
from ..services.analytics_service import summarize_performance

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/stats", response_model=PerformanceSummary)
async def get_performance(store: StoreDep):
    """Counts of finished, discarded and not finished goals."""
    goals = await goal_service.list_goals(store)
    return summarize_performance(goals)
