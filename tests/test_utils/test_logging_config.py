"""Tests for logging configuration."""

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from gong_mcp.utils.logging_config import (
    ROOT_LOGGER_NAME,
    ContextLogger,
    PlainFormatter,
    StructuredFormatter,
    setup_logging,
)


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="gong_mcp.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Reading resource %s",
        args=("gong://users",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_formats_json(self) -> None:
        """Test records are rendered as one JSON object."""
        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "gong_mcp.test"
        assert data["message"] == "Reading resource gong://users"
        assert data["line"] == 10
        assert "timestamp" in data

    def test_includes_extra_fields(self) -> None:
        """Test structured context is merged into the output."""
        record = make_record(extra_fields={"uri": "gong://users", "count": 2})
        data = json.loads(StructuredFormatter().format(record))

        assert data["uri"] == "gong://users"
        assert data["count"] == 2

    def test_includes_exception(self) -> None:
        """Test exception info is rendered."""
        try:
            raise ValueError("bad payload")
        except ValueError:
            record = make_record(exc_info=sys.exc_info())

        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: bad payload" in data["exception"]


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_logs_to_stderr(self, restore_root_logger: logging.Logger) -> None:
        """Test a single stderr handler is attached."""
        setup_logging(level="debug", structured=True)

        logger = restore_root_logger
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, StructuredFormatter)

    def test_plain_text_format(self, restore_root_logger: logging.Logger) -> None:
        """Test the plain text formatter is used when structured logging is off."""
        setup_logging(level="WARNING", structured=False)
        setup_logging(level="WARNING", structured=False)

        logger = restore_root_logger
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, PlainFormatter)


@pytest.mark.unit
class TestPlainFormatter:
    """Tests for PlainFormatter."""

    def test_appends_context(self) -> None:
        """Test structured context is rendered as key=value pairs."""
        record = make_record(extra_fields={"uri": "gong://users", "count": 2})
        line = PlainFormatter().format(record)

        assert "[INFO] [gong_mcp.test] Reading resource gong://users" in line
        assert line.endswith("uri=gong://users count=2")

    def test_without_context(self) -> None:
        """Test records without context are left unchanged."""
        line = PlainFormatter().format(make_record())

        assert line.endswith("Reading resource gong://users")


@pytest.mark.unit
class TestContextLogger:
    """Tests for ContextLogger."""

    def test_merges_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test default and per-call context are merged."""
        logger = ContextLogger("gong_mcp_context_test", {"component": "server"})

        with caplog.at_level(logging.INFO, logger="gong_mcp_context_test"):
            logger.info("Searching calls", extra={"limit": 3})

        record = caplog.records[-1]
        assert record.extra_fields == {"component": "server", "limit": 3}

    def test_bind(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test bind returns a logger with additional context."""
        logger = ContextLogger("gong_mcp_context_test").bind(call_id="123")

        with caplog.at_level(logging.WARNING, logger="gong_mcp_context_test"):
            logger.warning("Transcript empty", extra={"uri": "gong://calls/123/transcript"})

        record = caplog.records[-1]
        assert record.levelname == "WARNING"
        assert record.extra_fields == {
            "call_id": "123",
            "uri": "gong://calls/123/transcript",
        }

    def test_exception_carries_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test exception() logs at ERROR with the active exception attached."""
        logger = ContextLogger("gong_mcp_context_test")

        with caplog.at_level(logging.ERROR, logger="gong_mcp_context_test"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.exception("Unexpected failure", extra={"uri": "gong://users"})

        record = caplog.records[-1]
        assert record.levelname == "ERROR"
        assert record.exc_info is not None
        assert record.exc_info[0] is RuntimeError
        assert record.extra_fields == {"uri": "gong://users"}

    def test_records_caller_location(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test records point at the calling function, not the wrapper."""
        logger = ContextLogger("gong_mcp_context_test")

        with caplog.at_level(logging.INFO, logger="gong_mcp_context_test"):
            logger.info("Searching calls")

        assert caplog.records[-1].funcName == "test_records_caller_location"
