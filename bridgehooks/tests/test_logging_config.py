from __future__ import annotations

import json
import logging

import pytest

from bridgehooks.config import LoggingSettings
from bridgehooks.logging_config import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_emits_one_object_per_record() -> None:
    handler = configure_logging(LoggingSettings(LOG_LEVEL="warning", LOG_FORMAT="json"))
    record = logging.LogRecord(
        "bridgehooks.hooks.pool_deposit", logging.WARNING, __file__, 1, "rejected %s", ("x",), None
    )

    payload = json.loads(handler.format(record))

    assert isinstance(handler.formatter, JsonFormatter)
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "bridgehooks.hooks.pool_deposit"
    assert payload["message"] == "rejected x"
    assert logging.getLogger().level == logging.WARNING


def test_reconfiguring_replaces_previous_handler() -> None:
    configure_logging(LoggingSettings(LOG_FORMAT="json"))
    handler = configure_logging(LoggingSettings(LOG_FORMAT="text"))

    ours = [h for h in logging.getLogger().handlers if h.get_name() == "bridgehooks"]
    assert ours == [handler]
    assert not isinstance(handler.formatter, JsonFormatter)
