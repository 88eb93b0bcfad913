"""
Goal expiry reconciliation task (Celery).

Runs periodically so expired goals get discarded even when nobody lists
them.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from celery.schedules import schedule

from ..config import get_settings
from ..core.database import create_goal_store
from ..exceptions import StorageError
from ..services import goal_service
from ..services.goal_store import GoalStore
from .base import run_async_in_celery, task
from .schedules import register_periodic_task

logger = logging.getLogger(__name__)

TASK_RECONCILE_EXPIRED = "goals.reconcile_expired"


async def reconcile_expired(store: GoalStore, now: datetime | None = None) -> dict[str, Any]:
    """Discard expired goals using the configured expiry rules."""
    settings = get_settings()
    now = now or datetime.now(UTC)

    await store.connect()
    try:
        discarded = await goal_service.reconcile_expired_goals(
            store,
            now=now,
            reference=settings.EXPIRY_REFERENCE,
            threshold_hours=settings.DEADLINE_THRESHOLD_HOURS,
        )
    finally:
        await store.disconnect()

    return {
        "checked_at": now.isoformat(),
        "discarded": len(discarded),
        "goal_ids": [g.id for g in discarded],
    }


@task(name=TASK_RECONCILE_EXPIRED, max_retries=3, autoretry_for=(StorageError,), retry_backoff=True)
def reconcile_expired_goals_task() -> dict[str, Any]:
    """Celery entry point: build a store and reconcile."""
    return run_async_in_celery(reconcile_expired(create_goal_store()))


register_periodic_task(
    name="reconcile-expired-goals",
    schedule=schedule(run_every=get_settings().RECONCILE_INTERVAL_SECONDS),
    task=TASK_RECONCILE_EXPIRED,
)
