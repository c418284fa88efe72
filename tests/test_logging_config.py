"""Tests for logging setup."""

import json
import logging
import sys

import pytest

from depsync.logging_config import StructuredFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging()


def make_record(message="hello", exc_info=None):
    return logging.LogRecord("depsync.test", logging.WARNING, __file__, 1, message, None, exc_info)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_applied(self):
        """Test that logger and handler levels follow the argument."""
        logger = setup_logging(level="debug")
        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in logger.handlers)

    def test_repeated_setup_keeps_one_handler(self):
        """Test that calling setup again reconfigures instead of duplicating handlers."""
        setup_logging()
        logger = setup_logging(level="WARNING", structured=True)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_switch_back_to_plain(self):
        """Test that structured output can be turned off again."""
        setup_logging(structured=True)
        logger = setup_logging(structured=False)
        assert not isinstance(logger.handlers[0].formatter, StructuredFormatter)


class TestStructuredFormatter:
    """Tests for the JSON formatter."""

    def test_fields(self):
        """Test the JSON fields of a log line."""
        entry = json.loads(StructuredFormatter().format(make_record("sync done")))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "depsync.test"
        assert entry["message"] == "sync done"
        assert "timestamp" in entry
        assert "exception" not in entry

    def test_exception_included(self):
        """Test that exception text is included."""
        try:
            raise ValueError("bad")
        except ValueError:
            record = make_record(exc_info=sys.exc_info())
        entry = json.loads(StructuredFormatter().format(record))
        assert "ValueError: bad" in entry["exception"]
