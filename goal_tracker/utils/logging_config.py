"""
Structured (JSON) logging configuration.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from ..config import Settings, get_settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that adds the standard fields we aggregate on.
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        if "message" not in log_record:
            log_record["message"] = record.getMessage()


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure structured JSON logging for the application.

    Call once during application startup. The level comes from LOG_LEVEL;
    when unset it defaults to DEBUG in development and INFO elsewhere.
    """
    if settings is None:
        settings = get_settings()

    environment = settings.ENVIRONMENT.lower()
    log_level_str = settings.LOG_LEVEL.upper()
    if not log_level_str:
        log_level_str = "DEBUG" if environment == "development" else "INFO"
    log_level = getattr(logging, log_level_str, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            static_fields={
                "environment": environment,
                "application": "goal-tracker",
            },
        )
    )
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Structured logging configured",
        extra={"log_level": log_level_str, "environment": environment},
    )

    # Reduce third-party noise
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
