"""
Dependency injection system.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from typing import Annotated

from fastapi import Depends, Request

from .config import Settings
from .exceptions import StorageError
from .services.goal_store import GoalStore


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_goal_store(request: Request) -> GoalStore:
    """Goal store attached to the application at startup."""
    store = getattr(request.app.state, "goal_store", None)
    if store is None:
        raise StorageError("Goal store is not initialized")
    return store


StoreDep = Annotated[GoalStore, Depends(get_goal_store)]
