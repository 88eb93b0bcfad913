"""Background tasks package.

Celery tasks and their Beat schedules. Import ``goal_tasks`` to register
the goal reconciliation task.
"""

from .base import BaseTask, run_async_in_celery, task
from .schedules import get_periodic_tasks, register_periodic_task, unregister_periodic_task

__all__ = [
    "BaseTask",
    "task",
    "run_async_in_celery",
    "register_periodic_task",
    "unregister_periodic_task",
    "get_periodic_tasks",
]
