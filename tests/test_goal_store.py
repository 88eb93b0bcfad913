import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from goal_tracker.exceptions import DuplicateNameError, GoalNotFoundError
from goal_tracker.models.goals import GoalCreate, GoalStatus
from goal_tracker.services.goal_store import InMemoryGoalStore


def _draft(name: str = "Learn X") -> GoalCreate:
    return GoalCreate(
        goal_name=name,
        goal_description="d",
        goal_end_date=datetime.now(UTC) + timedelta(days=2),
    )


@pytest.mark.asyncio
async def test_insert_assigns_id_and_timestamps(store: InMemoryGoalStore):
    goal = await store.insert(_draft())

    assert goal.id
    assert goal.status is GoalStatus.ACTIVE
    assert goal.created_at == goal.updated_at
    assert goal.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_insert_rejects_duplicate_name(store: InMemoryGoalStore):
    await store.insert(_draft())

    with pytest.raises(DuplicateNameError):
        await store.insert(_draft())

    assert len(await store.list_all()) == 1


@pytest.mark.asyncio
async def test_find_unknown_id(store: InMemoryGoalStore):
    with pytest.raises(GoalNotFoundError):
        await store.find("missing")


@pytest.mark.asyncio
async def test_update_fields_refreshes_updated_at(store: InMemoryGoalStore):
    goal = await store.insert(_draft())
    await asyncio.sleep(0.01)

    updated = await store.update_fields(goal.id, {"status": GoalStatus.FINISHED})

    assert updated.status is GoalStatus.FINISHED
    assert updated.updated_at > goal.updated_at
    assert updated.created_at == goal.created_at


@pytest.mark.asyncio
async def test_update_and_delete_unknown_id(store: InMemoryGoalStore):
    with pytest.raises(GoalNotFoundError):
        await store.update_fields("missing", {"status": GoalStatus.FINISHED})
    with pytest.raises(GoalNotFoundError):
        await store.delete("missing")


@pytest.mark.asyncio
async def test_returned_goals_are_copies(store: InMemoryGoalStore):
    goal = await store.insert(_draft())
    goal.goal_name = "changed"

    stored = await store.find(goal.id)
    assert stored.goal_name == "Learn X"
