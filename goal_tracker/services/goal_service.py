"""
Service for Goal management.
"""

import logging
from datetime import UTC, datetime

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import GoalNotFoundError, GoalStateConflictError, ValidationError
from ..models.goals import Goal, GoalCreate, GoalStatus, as_utc
from ..utils.metrics import GOAL_MUTATIONS, GOALS_AUTO_DISCARDED
from .deadline_service import DEFAULT_THRESHOLD_HOURS, ExpiryReference, is_expired
from .goal_store import GoalStore

logger = logging.getLogger(__name__)


async def create_goal(
    store: GoalStore,
    name: str | None,
    description: str | None,
    end_date: datetime | None,
    resources_link: str | None = None,
) -> Goal:
    """
    Create a new goal.

    End dates in the past are accepted.
    """
    missing = [
        field
        for field, value in (
            ("goal_name", name),
            ("goal_description", description),
            ("goal_end_date", end_date),
        )
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    try:
        data = GoalCreate(
            goal_name=name,
            goal_description=description,
            goal_end_date=as_utc(end_date),
            resourcesLink=resources_link,
        )
    except PydanticValidationError as e:
        raise ValidationError("Invalid goal data", detail=str(e)) from e

    goal = await store.insert(data)
    GOAL_MUTATIONS.labels(operation="create").inc()
    logger.info("Goal created", extra={"goal_id": goal.id, "goal_name": goal.goal_name})
    return goal


async def list_goals(store: GoalStore) -> list[Goal]:
    """
    List all goals.
    """
    return await store.list_all()


async def get_goal(store: GoalStore, goal_id: str) -> Goal:
    """
    Get a goal by ID.
    """
    return await store.find(goal_id)


async def _transition(store: GoalStore, goal_id: str, target: GoalStatus) -> Goal:
    goal = await store.find(goal_id)

    if goal.status is target:
        return goal

    if goal.status is not GoalStatus.ACTIVE:
        raise GoalStateConflictError(
            f"Goal '{goal_id}' is already {goal.status.value.lower()} "
            f"and cannot be marked {target.value.lower()}"
        )

    updated = await store.update_fields(goal_id, {"status": target})
    GOAL_MUTATIONS.labels(operation=target.value.lower()).inc()
    logger.info(
        "Goal status changed",
        extra={"goal_id": goal_id, "from": goal.status.value, "to": target.value},
    )
    return updated


async def finish_goal(store: GoalStore, goal_id: str) -> Goal:
    """
    Mark a goal finished.

    Finishing an already finished goal is a no-op; finishing a discarded
    goal raises GoalStateConflictError.
    """
    return await _transition(store, goal_id, GoalStatus.FINISHED)


async def discard_goal(store: GoalStore, goal_id: str) -> Goal:
    """
    Mark a goal discarded. Idempotent.
    """
    return await _transition(store, goal_id, GoalStatus.DISCARDED)


async def delete_goal(store: GoalStore, goal_id: str) -> None:
    """
    Permanently delete a goal.
    """
    await store.delete(goal_id)
    GOAL_MUTATIONS.labels(operation="delete").inc()
    logger.info("Goal deleted", extra={"goal_id": goal_id})


async def reconcile_expired_goals(
    store: GoalStore,
    now: datetime | None = None,
    reference: ExpiryReference = "created_at",
    threshold_hours: float = DEFAULT_THRESHOLD_HOURS,
) -> list[Goal]:
    """
    Discard every active goal whose deadline has expired.

    Returns the goals that were discarded by this call.
    """
    if now is None:
        now = datetime.now(UTC)

    discarded: list[Goal] = []
    for goal in await store.list_all():
        if goal.status is not GoalStatus.ACTIVE:
            continue
        if not is_expired(goal, now, reference, threshold_hours):
            continue

        try:
            discarded.append(await discard_goal(store, goal.id))
        except GoalNotFoundError:
            # Deleted between listing and discarding
            logger.warning("Expired goal vanished during reconciliation", extra={"goal_id": goal.id})
        except GoalStateConflictError:
            # Finished between listing and discarding
            logger.info("Expired goal finished during reconciliation", extra={"goal_id": goal.id})

    if discarded:
        GOALS_AUTO_DISCARDED.inc(len(discarded))
        logger.info(
            f"Auto-discarded {len(discarded)} expired goal(s)",
            extra={"goal_ids": [g.id for g in discarded]},
        )
    return discarded
