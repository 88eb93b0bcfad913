"""Python client and dashboard view models for the goal tracker API."""

from .api_client import GoalTrackerClient, GoalTrackerClientError
from .board import GoalBoard, GoalCard, GoalCollections

__all__ = [
    "GoalTrackerClient",
    "GoalTrackerClientError",
    "GoalBoard",
    "GoalCard",
    "GoalCollections",
]
