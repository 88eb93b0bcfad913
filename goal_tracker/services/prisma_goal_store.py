"""
Prisma-backed goal store.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from prisma.errors import PrismaError, RecordNotFoundError, UniqueViolationError

from ..exceptions import DuplicateNameError, GoalNotFoundError, StorageError
from ..models.goals import Goal, GoalCreate
from .goal_store import GoalStore

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class PrismaGoalStore(GoalStore):
    """Goal store on top of the ``Goal`` table from prisma/schema.prisma."""

    def __init__(self, db: Prisma) -> None:
        self._db = db

    async def connect(self) -> None:
        if not self._db.is_connected():
            await self._db.connect()
            logger.info("Database connected")

    async def disconnect(self) -> None:
        if self._db.is_connected():
            await self._db.disconnect()
            logger.info("Database disconnected")

    async def ping(self) -> bool:
        try:
            result = await self._db.query_raw("SELECT 1 as test")
        except PrismaError as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        return bool(result)

    async def insert(self, goal: GoalCreate) -> Goal:
        try:
            record = await self._db.goal.create(data=goal.model_dump(exclude_none=True))
        except UniqueViolationError as e:
            raise DuplicateNameError(goal.goal_name, detail=str(e)) from e
        except PrismaError as e:
            raise StorageError("Failed to create goal", detail=str(e)) from e
        return _to_goal(record)

    async def find(self, goal_id: str) -> Goal:
        try:
            record = await self._db.goal.find_unique(where={"id": goal_id})
        except PrismaError as e:
            raise StorageError("Failed to load goal", detail=str(e)) from e
        if record is None:
            raise GoalNotFoundError(goal_id)
        return _to_goal(record)

    async def list_all(self) -> list[Goal]:
        try:
            records = await self._db.goal.find_many(order={"created_at": "asc"})
        except PrismaError as e:
            raise StorageError("Failed to list goals", detail=str(e)) from e
        return [_to_goal(r) for r in records]

    async def update_fields(self, goal_id: str, fields: dict[str, Any]) -> Goal:
        data = {k: v.value if isinstance(v, Enum) else v for k, v in fields.items()}
        try:
            record = await self._db.goal.update(where={"id": goal_id}, data=data)
        except RecordNotFoundError:
            raise GoalNotFoundError(goal_id) from None
        except PrismaError as e:
            raise StorageError("Failed to update goal", detail=str(e)) from e
        if record is None:
            raise GoalNotFoundError(goal_id)
        return _to_goal(record)

    async def delete(self, goal_id: str) -> None:
        try:
            record = await self._db.goal.delete(where={"id": goal_id})
        except RecordNotFoundError:
            raise GoalNotFoundError(goal_id) from None
        except PrismaError as e:
            raise StorageError("Failed to delete goal", detail=str(e)) from e
        if record is None:
            raise GoalNotFoundError(goal_id)


def _to_goal(record: Any) -> Goal:
    return Goal.model_validate(record.model_dump())
