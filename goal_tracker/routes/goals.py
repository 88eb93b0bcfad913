"""
Goal routes.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).

Paths match the ones the web frontend already calls, so they are not
grouped under a common prefix.
"""

from fastapi import APIRouter

from ..dependencies import SettingsDep, StoreDep
from ..models.error_response import ErrorResponse
from ..models.goals import Goal, GoalCreate, MessageResponse
from ..services import goal_service

router = APIRouter(
    tags=["goals"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("/api/", response_model=list[Goal])
async def list_goals(store: StoreDep, settings: SettingsDep):
    """
    List all goals.

    Expired active goals are discarded first when RECONCILE_ON_LIST is on.
    """
    if settings.RECONCILE_ON_LIST:
        await goal_service.reconcile_expired_goals(
            store,
            reference=settings.EXPIRY_REFERENCE,
            threshold_hours=settings.DEADLINE_THRESHOLD_HOURS,
        )
    return await goal_service.list_goals(store)


@router.get("/api/goal/details/{goal_id}", response_model=Goal)
async def get_goal(goal_id: str, store: StoreDep):
    """
    Get a specific goal by ID.
    """
    return await goal_service.get_goal(store, goal_id)


@router.post("/create_goal", response_model=Goal)
async def create_goal(data: GoalCreate, store: StoreDep):
    """
    Create a new goal.
    """
    return await goal_service.create_goal(
        store,
        data.goal_name,
        data.goal_description,
        data.goal_end_date,
        resources_link=data.resourcesLink,
    )


@router.patch("/finish_goal/{goal_id}", response_model=MessageResponse)
async def finish_goal(goal_id: str, store: StoreDep):
    """
    Mark a goal finished.
    """
    await goal_service.finish_goal(store, goal_id)
    return MessageResponse(message="Goal marked as finished")


@router.patch("/discard_goal/{goal_id}", response_model=MessageResponse)
async def discard_goal(goal_id: str, store: StoreDep):
    """
    Mark a goal discarded.
    """
    await goal_service.discard_goal(store, goal_id)
    return MessageResponse(message="Goal marked as discarded")


@router.delete("/delete_goal/{goal_id}", response_model=MessageResponse)
async def delete_goal(goal_id: str, store: StoreDep):
    """
    Delete a goal.
    """
    await goal_service.delete_goal(store, goal_id)
    return MessageResponse(message="Goal deleted successfully")
