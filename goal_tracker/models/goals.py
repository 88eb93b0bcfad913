"""
Goal models for request/response schemas.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class GoalStatus(str, Enum):
    """Goal lifecycle states. FINISHED and DISCARDED are terminal."""

    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"
    DISCARDED = "DISCARDED"


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class GoalCreate(BaseModel):
    """Schema for creating a new goal."""

    goal_name: str = Field(..., min_length=1)
    goal_description: str = Field(..., min_length=1)
    goal_end_date: datetime
    resourcesLink: str | None = None

    @field_validator("goal_name", "goal_description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("goal_end_date")
    @classmethod
    def _end_date_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class Goal(BaseModel):
    """A stored goal."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    goal_name: str
    goal_description: str
    goal_end_date: datetime
    status: GoalStatus = GoalStatus.ACTIVE
    resourcesLink: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("goal_end_date", "created_at", "updated_at")
    @classmethod
    def _timestamps_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_finished(self) -> bool:
        return self.status is GoalStatus.FINISHED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_discarded(self) -> bool:
        return self.status is GoalStatus.DISCARDED


class MessageResponse(BaseModel):
    """Acknowledgement returned by mutation endpoints."""

    message: str
