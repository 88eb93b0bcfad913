"""
Application exception hierarchy.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).

Every error raised by the goal service derives from GoalTrackerError. The
global handlers in main.py turn them into ``{"error": ..., "code": ...}``
JSON bodies with the status code carried by the exception.
"""

from fastapi import status


class GoalTrackerError(Exception):
    """
    Base class for all application errors.

    Attributes:
        message: User-facing error message
        code: Application-specific error code for programmatic handling
        status_code: HTTP status code used when the error reaches the API
        detail: Optional internal details (only exposed in debug mode)
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail


class ValidationError(GoalTrackerError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class DuplicateNameError(GoalTrackerError):
    """A goal with the same name already exists."""

    status_code = status.HTTP_409_CONFLICT
    code = "DUPLICATE_GOAL_NAME"

    def __init__(self, goal_name: str, detail: str | None = None) -> None:
        super().__init__(f"A goal named '{goal_name}' already exists", detail=detail)
        self.goal_name = goal_name


class GoalNotFoundError(GoalTrackerError):
    """The goal id does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "GOAL_NOT_FOUND"

    def __init__(self, goal_id: str) -> None:
        super().__init__(f"Goal '{goal_id}' not found")
        self.goal_id = goal_id


class GoalStateConflictError(GoalTrackerError):
    """The requested transition would leave a goal both finished and discarded."""

    status_code = status.HTTP_409_CONFLICT
    code = "GOAL_STATE_CONFLICT"


class StorageError(GoalTrackerError):
    """The underlying persistence layer failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_ERROR"

