from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from goal_tracker.config import Settings
from goal_tracker.main import create_app
from goal_tracker.services.goal_store import InMemoryGoalStore


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        GOAL_STORE_BACKEND="memory",
        ENVIRONMENT="test",
        DEBUG=False,
        LEGACY_ERROR_STATUS=False,
        RECONCILE_ON_LIST=True,
    )


@pytest.fixture
def store() -> InMemoryGoalStore:
    return InMemoryGoalStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryGoalStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Async client bound to the in-process app.
    The app's lifespan is bypassed; the store is injected directly.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
