from datetime import UTC, datetime, timedelta

import pytest

from goal_tracker.models.goals import Goal, GoalStatus
from goal_tracker.services.analytics_service import summarize_performance


def _goal(i: int, status: GoalStatus) -> Goal:
    now = datetime.now(UTC)
    return Goal(
        id=str(i),
        goal_name=f"Goal {i}",
        goal_description="d",
        goal_end_date=now + timedelta(days=3),
        status=status,
        created_at=now,
        updated_at=now,
    )


def test_summarize_empty():
    summary = summarize_performance([])
    assert summary.model_dump() == {"total": 0, "finished": 0, "discarded": 0, "not_finished": 0}


def test_summarize_counts_each_state():
    goals = [
        _goal(1, GoalStatus.FINISHED),
        _goal(2, GoalStatus.FINISHED),
        _goal(3, GoalStatus.DISCARDED),
        _goal(4, GoalStatus.ACTIVE),
    ]

    summary = summarize_performance(goals)

    assert summary.total == 4
    assert summary.finished == 2
    assert summary.discarded == 1
    assert summary.not_finished == 1


@pytest.mark.asyncio
async def test_stats_endpoint(client, store):
    for name in ("A", "B"):
        await client.post(
            "/create_goal",
            json={
                "goal_name": name,
                "goal_description": "d",
                "goal_end_date": (datetime.now(UTC) + timedelta(days=5)).isoformat(),
            },
        )
    goal_id = (await store.list_all())[0].id
    await client.patch(f"/finish_goal/{goal_id}")

    response = await client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == {"total": 2, "finished": 1, "discarded": 0, "not_finished": 1}
