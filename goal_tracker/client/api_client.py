"""
HTTP client for the goal tracker API.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

import logging
from datetime import datetime
from typing import Any

import httpx

from ..models.analytics import PerformanceSummary
from ..models.goals import Goal

logger = logging.getLogger(__name__)


class GoalTrackerClientError(Exception):
    """Raised for any non-2xx API response."""

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.code = code


class GoalTrackerClient:
    """
    Async client for the goal endpoints.

    Pass ``transport`` to talk to an in-process app (e.g. httpx.ASGITransport).
    Use as an async context manager or call ``aclose()`` when done.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "GoalTrackerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        response = await self._http.request(method, url, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("error") or response.text or response.reason_phrase
            logger.debug(
                "Goal API request failed",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            raise GoalTrackerClientError(response.status_code, message, body.get("code"))
        return response.json()

    async def list_goals(self) -> list[Goal]:
        data = await self._request("GET", "/api/")
        return [Goal.model_validate(item) for item in data]

    async def get_goal(self, goal_id: str) -> Goal:
        return Goal.model_validate(await self._request("GET", f"/api/goal/details/{goal_id}"))

    async def create_goal(
        self,
        goal_name: str,
        goal_description: str,
        goal_end_date: datetime,
        resources_link: str | None = None,
    ) -> Goal:
        payload: dict[str, Any] = {
            "goal_name": goal_name,
            "goal_description": goal_description,
            "goal_end_date": goal_end_date.isoformat(),
        }
        if resources_link is not None:
            payload["resourcesLink"] = resources_link
        return Goal.model_validate(await self._request("POST", "/create_goal", json=payload))

    async def finish_goal(self, goal_id: str) -> str:
        return (await self._request("PATCH", f"/finish_goal/{goal_id}"))["message"]

    async def discard_goal(self, goal_id: str) -> str:
        return (await self._request("PATCH", f"/discard_goal/{goal_id}"))["message"]

    async def delete_goal(self, goal_id: str) -> str:
        return (await self._request("DELETE", f"/delete_goal/{goal_id}"))["message"]

    async def get_stats(self) -> PerformanceSummary:
        return PerformanceSummary.model_validate(await self._request("GET", "/api/stats"))
