"""
Database client construction.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import Settings, get_settings

if TYPE_CHECKING:
    from prisma import Prisma

    from ..services.goal_store import GoalStore

logger = logging.getLogger(__name__)


def create_prisma_client(settings: Settings | None = None) -> Prisma:
    """Build a Prisma client for the configured database.

    The import is deferred because ``prisma`` only exposes ``Prisma`` once
    ``prisma generate`` has run.
    """
    from prisma import Prisma

    if settings is None:
        settings = get_settings()
    return Prisma(datasource={"url": settings.DATABASE_URL})


def create_goal_store(settings: Settings | None = None) -> GoalStore:
    """Build the goal store selected by ``GOAL_STORE_BACKEND``."""
    from ..services.goal_store import InMemoryGoalStore
    from ..services.prisma_goal_store import PrismaGoalStore

    if settings is None:
        settings = get_settings()

    if settings.GOAL_STORE_BACKEND == "memory":
        logger.warning("Using in-memory goal store; data will not survive a restart")
        return InMemoryGoalStore()

    return PrismaGoalStore(create_prisma_client(settings))
