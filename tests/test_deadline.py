from datetime import UTC, datetime, timedelta

import pytest

from goal_tracker.models.goals import Goal
from goal_tracker.services.deadline_service import days_remaining, hours_remaining, is_expired


def _goal(created_at: datetime, end_in_hours: float) -> Goal:
    return Goal(
        id="g1",
        goal_name="Learn X",
        goal_description="d",
        goal_end_date=created_at + timedelta(hours=end_in_hours),
        created_at=created_at,
        updated_at=created_at,
    )


def test_forty_eight_hours_shows_three_days(now):
    goal = _goal(now, 48)

    assert hours_remaining(goal) == 48
    assert days_remaining(goal) == 3
    assert is_expired(goal) is False


def test_one_hour_is_expired(now):
    goal = _goal(now, 1)

    assert hours_remaining(goal) == 1
    assert days_remaining(goal) is None
    assert is_expired(goal) is True


@pytest.mark.parametrize(
    "hours, days",
    [
        (24, None),
        (24.5, 2),
        (47.9, 2),
        (72, 4),
        (-5, None),
    ],
)
def test_days_remaining_boundaries(now, hours, days):
    assert days_remaining(_goal(now, hours)) == days


def test_default_reference_ignores_wall_clock(now):
    goal = _goal(now, 48)
    much_later = now + timedelta(days=30)

    assert is_expired(goal, now=much_later) is False


def test_reference_now_uses_wall_clock(now):
    goal = _goal(now, 48)

    assert is_expired(goal, now=now + timedelta(hours=20), reference="now") is False
    assert is_expired(goal, now=now + timedelta(hours=30), reference="now") is True
    assert days_remaining(goal, now=now + timedelta(hours=12), reference="now") == 2


def test_custom_threshold(now):
    goal = _goal(now, 10)

    assert is_expired(goal, threshold_hours=6) is False
    assert days_remaining(goal, threshold_hours=6) == 1


def test_naive_now_is_treated_as_utc(now):
    goal = _goal(now, 48)
    naive = datetime(2025, 3, 2, 12, 0)

    assert hours_remaining(goal, now=naive, reference="now") == 24
    assert goal.created_at.tzinfo is UTC
