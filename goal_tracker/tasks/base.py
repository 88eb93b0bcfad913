"""Base task class and decorator for Celery tasks.

Usage:
    ```python
    from .tasks.base import task

    @task(name="goals.example", max_retries=3)
    def my_background_task(goal_id: str) -> dict:
        return {"goal_id": goal_id}
    ```
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, Callable, TypeVar

from celery import Task

from ..core.celery_app import celery_app

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseTask(Task):
    """Base task class that logs failures, successes and retries."""

    def on_failure(self, exc: Exception, task_id: str, args: tuple, kwargs: dict[str, Any], einfo: Any) -> None:
        logger.error(
            f"Task {self.name} (ID: {task_id}) failed",
            extra={
                "task_id": task_id,
                "task_name": self.name,
                "exception": str(exc),
                "exception_type": type(exc).__name__,
            },
            exc_info=exc,
        )
        super().on_failure(exc, task_id, args, kwargs, einfo)

    def on_success(self, retval: Any, task_id: str, args: tuple, kwargs: dict[str, Any]) -> None:
        logger.info(
            f"Task {self.name} (ID: {task_id}) completed successfully",
            extra={"task_id": task_id, "task_name": self.name},
        )
        super().on_success(retval, task_id, args, kwargs)

    def on_retry(self, exc: Exception, task_id: str, args: tuple, kwargs: dict[str, Any], einfo: Any) -> None:
        logger.warning(
            f"Task {self.name} (ID: {task_id}) retrying",
            extra={
                "task_id": task_id,
                "task_name": self.name,
                "retry_count": self.request.retries,
                "max_retries": self.max_retries,
                "exception": str(exc),
            },
        )
        super().on_retry(exc, task_id, args, kwargs, einfo)


def task(
    name: str | None = None,
    base: type[Task] = BaseTask,
    bind: bool = False,
    max_retries: int = 3,
    default_retry_delay: int = 60,
    **kwargs: Any,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator factory for creating Celery tasks with consistent patterns.

    Args:
        name: Task name (defaults to module path + function name)
        base: Base task class (defaults to BaseTask)
        bind: Whether to bind task instance (for accessing self.request)
        max_retries: Maximum number of retry attempts
        default_retry_delay: Default delay between retries (seconds)
        **kwargs: Additional Celery task options
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        task_name = name or f"tasks.{func.__module__}.{func.__name__}"

        registered_task = celery_app.task(
            name=task_name,
            base=base,
            bind=bind,
            max_retries=max_retries,
            default_retry_delay=default_retry_delay,
            **kwargs,
        )(func)

        logger.debug(f"Registered task: {task_name}")
        return registered_task

    return decorator


def run_async_in_celery(coro: Awaitable[T]) -> T:
    """Run a coroutine to completion from a synchronous Celery worker."""
    return asyncio.run(coro)
