import json
import logging

from goal_tracker.config import Settings
from goal_tracker.utils.logging_config import CustomJsonFormatter, configure_logging


def test_formatter_emits_json_fields():
    formatter = CustomJsonFormatter(fmt="%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord(
        name="goal_tracker.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="Goal %s expired",
        args=("abc",),
        exc_info=None,
    )
    record.goal_id = "abc"

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Goal abc expired"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "goal_tracker.test"
    assert payload["goal_id"] == "abc"


def test_configure_logging_level_from_settings():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging(Settings(_env_file=None, ENVIRONMENT="production", LOG_LEVEL=""))
        assert root.level == logging.INFO

        configure_logging(Settings(_env_file=None, ENVIRONMENT="production", LOG_LEVEL="error"))
        assert root.level == logging.ERROR
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
