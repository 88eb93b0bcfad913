from datetime import UTC, datetime, timedelta

import pytest
from celery.schedules import schedule

from goal_tracker.exceptions import StorageError
from goal_tracker.models.goals import GoalStatus
from goal_tracker.services import goal_service
from goal_tracker.services.goal_store import InMemoryGoalStore
from goal_tracker.tasks.goal_tasks import (
    TASK_RECONCILE_EXPIRED,
    reconcile_expired,
    reconcile_expired_goals_task,
)
from goal_tracker.tasks.schedules import get_periodic_tasks, register_periodic_task, unregister_periodic_task


@pytest.mark.asyncio
async def test_reconcile_expired(store: InMemoryGoalStore):
    short = await goal_service.create_goal(store, "Short", "d", datetime.now(UTC) + timedelta(hours=1))
    await goal_service.create_goal(store, "Long", "d", datetime.now(UTC) + timedelta(hours=48))

    result = await reconcile_expired(store)

    assert result["discarded"] == 1
    assert result["goal_ids"] == [short.id]
    assert (await store.find(short.id)).status is GoalStatus.DISCARDED


def test_task_is_registered():
    assert reconcile_expired_goals_task.name == TASK_RECONCILE_EXPIRED


def test_task_retries_on_storage_errors():
    assert reconcile_expired_goals_task.autoretry_for == (StorageError,)
    assert reconcile_expired_goals_task.max_retries == 3
    assert reconcile_expired_goals_task.retry_backoff is True


def test_reconcile_is_scheduled():
    entry = get_periodic_tasks()["reconcile-expired-goals"]
    assert entry["task"] == TASK_RECONCILE_EXPIRED


def test_register_and_unregister_periodic_task():
    register_periodic_task(name="test-entry", schedule=schedule(run_every=60), task=reconcile_expired_goals_task)
    assert get_periodic_tasks()["test-entry"]["task"] == TASK_RECONCILE_EXPIRED

    unregister_periodic_task("test-entry")
    assert "test-entry" not in get_periodic_tasks()
