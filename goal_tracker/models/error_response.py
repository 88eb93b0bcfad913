"""
Standardized error response model for consistent API error handling.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    The ``error`` key carries the message so clients written against the
    first release of the API keep working; ``code`` is added for
    programmatic handling.

    Attributes:
        error: User-friendly error message
        code: Application-specific error code
        detail: Optional internal details for debugging (excluded in production)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "A goal named 'Learn Rust' already exists",
                "code": "DUPLICATE_GOAL_NAME",
            }
        }
    )

    error: str = Field(..., description="User-friendly error message")

    code: str = Field(..., description="Application-specific error code")

    detail: str | None = Field(
        None,
        description="Internal error details for debugging (may be excluded in production)",
    )
