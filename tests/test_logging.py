"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import sys

from debtsage.logging_config import JSONFormatter, get_logger, setup_logging


def _record(**kwargs) -> logging.LogRecord:
    defaults = dict(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg="Test message",
        args=(),
        exc_info=None,
    )
    defaults.update(kwargs)
    record = logging.LogRecord(**defaults)
    record.module = "test_module"
    record.funcName = "test_function"
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
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_with_extra_fields():
    record = _record()
    record.strategy = "avalanche"
    record.months = 14

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"strategy": "avalanche", "months": 14}


def test_setup_logging(make_config):
    config = make_config()

    logger = setup_logging(config)

    try:
        assert logger.name == "debtsage"
        assert (config.DATA_DIR / "logs").is_dir()
        assert len(logger.handlers) == 2

        # Calling again replaces handlers instead of stacking them
        setup_logging(config)
        assert len(logger.handlers) == 2

        get_logger("services.debts").warning("Payoff simulation hit the month cap")
        for handler in logger.handlers:
            handler.flush()
        lines = (config.DATA_DIR / "logs" / "debtsage.log").read_text(encoding="utf-8").splitlines()
        last = json.loads(lines[-1])
        assert last["level"] == "WARNING"
        assert last["logger"] == "debtsage.services.debts"
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_get_logger_namespacing():
    assert get_logger("custom").name == "debtsage.custom"
    assert get_logger("debtsage.services.debts").name == "debtsage.services.debts"
    assert get_logger("debtsage").name == "debtsage"
