"""
Deadline computations for goals.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).

All functions here are pure: they never touch the store. Expired goals are
discarded by ``goal_service.reconcile_expired_goals``.

The remaining time is measured from ``created_at`` by default, which is what
the first release of the app did. Pass ``reference="now"`` to measure from
the current time instead.
"""

import math
from datetime import UTC, datetime
from typing import Literal

from ..models.goals import Goal, as_utc

ExpiryReference = Literal["created_at", "now"]

DEFAULT_THRESHOLD_HOURS = 24.0


def hours_remaining(
    goal: Goal,
    now: datetime | None = None,
    reference: ExpiryReference = "created_at",
) -> float:
    """Hours between the reference point and the goal's end date."""
    if reference == "now":
        start = as_utc(now) if now is not None else datetime.now(UTC)
    else:
        start = goal.created_at
    return (as_utc(goal.goal_end_date) - as_utc(start)).total_seconds() / 3600


def days_remaining(
    goal: Goal,
    now: datetime | None = None,
    reference: ExpiryReference = "created_at",
    threshold_hours: float = DEFAULT_THRESHOLD_HOURS,
) -> int | None:
    """
    Whole days shown for the deadline, or None once the goal is expired.

    A goal with 48 hours left shows 3 days: ``floor(hours / 24) + 1``.
    """
    hours = hours_remaining(goal, now, reference)
    if hours <= threshold_hours:
        return None
    return math.floor(hours / 24) + 1


def is_expired(
    goal: Goal,
    now: datetime | None = None,
    reference: ExpiryReference = "created_at",
    threshold_hours: float = DEFAULT_THRESHOLD_HOURS,
) -> bool:
    """True when no more than ``threshold_hours`` remain."""
    return hours_remaining(goal, now, reference) <= threshold_hours
