"""Scheduled task infrastructure for periodic tasks.

Periodic tasks are registered with Celery Beat through
``register_periodic_task``.
"""

import logging
from typing import Any, Callable

from celery.schedules import crontab, schedule

from ..core.celery_app import celery_app

logger = logging.getLogger(__name__)


def register_periodic_task(
    name: str,
    schedule: crontab | schedule,
    task: Callable | str | None = None,
    args: tuple = (),
    kwargs: dict[str, Any] | None = None,
    options: dict[str, Any] | None = None,
) -> Callable | str | None:
    """Register a periodic task with Celery Beat.

    Args:
        name: Unique name for the periodic task
        schedule: Celery schedule object (crontab, schedule, etc.)
        task: Task object or task name string
        args: Positional arguments to pass to task
        kwargs: Keyword arguments to pass to task
        options: Additional task options

    Returns:
        The task passed in
    """
    if isinstance(task, str):
        task_name = task
    elif task is not None:
        task_name = getattr(task, "name", None) or task.__name__
    else:
        task_name = name

    celery_app.conf.beat_schedule[name] = {
        "task": task_name,
        "schedule": schedule,
        "args": args,
        "kwargs": kwargs or {},
        "options": options or {},
    }

    logger.info(f"Registered periodic task: {name} with schedule {schedule}")
    return task


def unregister_periodic_task(name: str) -> None:
    """Unregister a periodic task."""
    if name in celery_app.conf.beat_schedule:
        del celery_app.conf.beat_schedule[name]
        logger.info(f"Unregistered periodic task: {name}")
    else:
        logger.warning(f"Periodic task {name} not found")


def get_periodic_tasks() -> dict[str, dict[str, Any]]:
    """Get all registered periodic tasks."""
    return dict(celery_app.conf.beat_schedule)
