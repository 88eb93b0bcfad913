"""
View-model state for the goal dashboard.

Rendering (``cards``, ``collections``, ``performance``) is pure and works on
the last loaded snapshot. Discarding expired goals is a separate, explicit
``reconcile`` step.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from ..models.analytics import PerformanceSummary
from ..models.goals import Goal, GoalStatus
from ..services.analytics_service import summarize_performance
from ..services.deadline_service import (
    DEFAULT_THRESHOLD_HOURS,
    ExpiryReference,
    days_remaining,
    is_expired,
)
from .api_client import GoalTrackerClient, GoalTrackerClientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalCard:
    """Everything a goal tile displays."""

    id: str
    name: str
    description: str
    status: GoalStatus
    end_date: datetime
    deadline_days: int | None
    expired: bool

    @property
    def deadline_label(self) -> str:
        if self.status is GoalStatus.FINISHED:
            return "Finished"
        if self.status is GoalStatus.DISCARDED:
            return "Discarded"
        if self.deadline_days is None:
            return "Expired"
        return f"{self.deadline_days} days"


@dataclass(frozen=True)
class GoalCollections:
    active: list[GoalCard]
    finished: list[GoalCard]
    discarded: list[GoalCard]


class GoalBoard:
    """Holds the goals fetched from the API and derives what to show."""

    def __init__(
        self,
        client: GoalTrackerClient,
        reference: ExpiryReference = "created_at",
        threshold_hours: float = DEFAULT_THRESHOLD_HOURS,
    ) -> None:
        self.client = client
        self.reference = reference
        self.threshold_hours = threshold_hours
        self.goals: list[Goal] = []

    async def load(self) -> list[Goal]:
        self.goals = await self.client.list_goals()
        return self.goals

    def card(self, goal: Goal, now: datetime | None = None) -> GoalCard:
        now = now or datetime.now(UTC)
        return GoalCard(
            id=goal.id,
            name=goal.goal_name,
            description=goal.goal_description,
            status=goal.status,
            end_date=goal.goal_end_date,
            deadline_days=days_remaining(goal, now, self.reference, self.threshold_hours),
            expired=is_expired(goal, now, self.reference, self.threshold_hours),
        )

    def cards(self, now: datetime | None = None) -> list[GoalCard]:
        now = now or datetime.now(UTC)
        return [self.card(g, now) for g in self.goals]

    def collections(self, now: datetime | None = None) -> GoalCollections:
        cards = self.cards(now)
        return GoalCollections(
            active=[c for c in cards if c.status is GoalStatus.ACTIVE],
            finished=[c for c in cards if c.status is GoalStatus.FINISHED],
            discarded=[c for c in cards if c.status is GoalStatus.DISCARDED],
        )

    def performance(self) -> PerformanceSummary:
        return summarize_performance(self.goals)

    async def reconcile(self, now: datetime | None = None) -> list[str]:
        """
        Discard every loaded active goal that has expired, then reload.

        Returns the ids that were discarded. Failures are logged and skipped.
        """
        expired_ids = [c.id for c in self.cards(now) if c.status is GoalStatus.ACTIVE and c.expired]

        discarded = []
        for goal_id in expired_ids:
            try:
                await self.client.discard_goal(goal_id)
            except GoalTrackerClientError as e:
                logger.warning(
                    f"Failed to discard expired goal: {e.message}",
                    extra={"goal_id": goal_id, "status_code": e.status_code},
                )
                continue
            discarded.append(goal_id)

        if expired_ids:
            await self.load()
        return discarded
