"""
Goal storage interface and the in-memory backend.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from ..exceptions import DuplicateNameError, GoalNotFoundError
from ..models.goals import Goal, GoalCreate, GoalStatus


class GoalStore(ABC):
    """
    Persistence for goal records.

    Implementations guarantee that ``goal_name`` is unique and raise the
    application exceptions (never backend-specific ones).
    """

    async def connect(self) -> None:
        """Open the underlying connection, if any."""

    async def disconnect(self) -> None:
        """Close the underlying connection, if any."""

    async def ping(self) -> bool:
        """Return True when the backend answers."""
        return True

    @abstractmethod
    async def insert(self, goal: GoalCreate) -> Goal:
        raise NotImplementedError

    @abstractmethod
    async def find(self, goal_id: str) -> Goal:
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> list[Goal]:
        raise NotImplementedError

    @abstractmethod
    async def update_fields(self, goal_id: str, fields: dict[str, Any]) -> Goal:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, goal_id: str) -> None:
        raise NotImplementedError


class InMemoryGoalStore(GoalStore):
    """Dict-backed store used by tests and local development."""

    def __init__(self) -> None:
        self._goals: dict[str, Goal] = {}

    async def insert(self, goal: GoalCreate) -> Goal:
        if any(g.goal_name == goal.goal_name for g in self._goals.values()):
            raise DuplicateNameError(goal.goal_name)

        now = datetime.now(UTC)
        record = Goal(
            id=uuid.uuid4().hex,
            goal_name=goal.goal_name,
            goal_description=goal.goal_description,
            goal_end_date=goal.goal_end_date,
            status=GoalStatus.ACTIVE,
            resourcesLink=goal.resourcesLink,
            created_at=now,
            updated_at=now,
        )
        self._goals[record.id] = record
        return record.model_copy()

    async def find(self, goal_id: str) -> Goal:
        try:
            return self._goals[goal_id].model_copy()
        except KeyError:
            raise GoalNotFoundError(goal_id) from None

    async def list_all(self) -> list[Goal]:
        return [g.model_copy() for g in self._goals.values()]

    async def update_fields(self, goal_id: str, fields: dict[str, Any]) -> Goal:
        if goal_id not in self._goals:
            raise GoalNotFoundError(goal_id)

        updated = self._goals[goal_id].model_copy(
            update={**fields, "updated_at": datetime.now(UTC)}
        )
        self._goals[goal_id] = updated
        return updated.model_copy()

    async def delete(self, goal_id: str) -> None:
        if self._goals.pop(goal_id, None) is None:
            raise GoalNotFoundError(goal_id)
