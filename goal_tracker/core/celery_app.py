"""Celery application factory for background task processing.

Redis is the default broker and result backend. Tasks are declared with
the ``task`` decorator from ``goal_tracker.tasks.base``.
"""

import logging
from typing import Any

from celery import Celery
from celery.signals import setup_logging

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_celery_app(settings: Settings | None = None) -> Celery:
    """Create and configure Celery application.

    Args:
        settings: Application settings. If None, will fetch from get_settings().

    Returns:
        Configured Celery application instance
    """
    if settings is None:
        settings = get_settings()

    celery_app = Celery(
        "goal_tracker",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
        include=["goal_tracker.tasks.goal_tasks"],
    )

    celery_app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone=settings.CELERY_TIMEZONE,
        enable_utc=True,
        task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        worker_prefetch_multiplier=1,
        task_default_queue="default",
        result_expires=3600,
        task_time_limit=300,  # Hard time limit (5 minutes)
        task_soft_time_limit=240,  # Soft time limit (4 minutes)
        worker_max_tasks_per_child=1000,
    )

    @setup_logging.connect(weak=False)
    def config_loggers(*args: Any, **kwargs: Any) -> None:
        """Use the application's JSON logging instead of Celery's."""
        from ..utils.logging_config import configure_logging

        configure_logging(settings)

    logger.info("Celery application configured successfully")
    return celery_app


# Global Celery app instance
celery_app = create_celery_app()
