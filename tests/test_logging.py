"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from nityam.logging_config import JSONFormatter, get_logger, setup_logging


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_json_formatter_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(habit_id="abc", checked=3)))
    assert log_data["extra"] == {"habit_id": "abc", "checked": 3}


def test_setup_logging(config):
    """setup_logging writes JSON lines to the rotating log file."""
    logger = setup_logging(config)

    assert logger.name == "nityam"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    log_file = config.DATA_DIR / "logs" / "nityam.log"
    assert log_file.exists()

    logger.warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    assert len(lines) >= 2
    for line in lines:
        entry = json.loads(line)
        assert {"timestamp", "level", "message"} <= entry.keys()


def test_get_logger():
    assert get_logger("module1").name == "nityam.module1"
    assert get_logger("nityam.scheduler").name == "nityam.scheduler"


def test_module_loggers_reach_log_file(config, habit_repo, today):
    """Service and scheduler loggers sit under the configured namespace."""
    from nityam import scheduler
    from nityam.services import habits

    assert scheduler.logger.name == "nityam.scheduler"
    assert habits.logger.name == "nityam.services.habits"

    logger = setup_logging(config)
    habits.rollover_all(habit_repo, today)
    for handler in logger.handlers:
        handler.flush()

    log_file = config.DATA_DIR / "logs" / "nityam.log"
    entries = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert any(entry["logger"] == "nityam.services.habits" for entry in entries)


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(config, dev_mode):
    config.DEV_MODE = dev_mode
    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    assert console_handler.level == (logging.INFO if dev_mode else logging.WARNING)
