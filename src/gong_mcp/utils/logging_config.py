"""Logging for the Gong MCP server.

Everything is written to stderr: in stdio mode stdout carries the MCP
protocol stream, so a stray print or stdout handler corrupts the session.
Records are rendered either as one JSON object per line or as plain text,
and in both cases the structured context attached by ``ContextLogger``
travels with the record under ``extra_fields``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER_NAME = "gong_mcp"

PLAIN_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _context_of(record: logging.LogRecord) -> dict[str, Any]:
    return dict(getattr(record, "extra_fields", None) or {})


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON line for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(_context_of(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class PlainFormatter(logging.Formatter):
    """Human-readable lines with the structured context appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(PLAIN_FORMAT, datefmt=PLAIN_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_of(record)
        if not context:
            return line

        rendered = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {rendered}{sep}{tail}"


def setup_logging(level: str = "INFO", structured: bool = True) -> None:
    """Send the ``gong_mcp`` logger hierarchy to stderr.

    Safe to call more than once; the previous handler is replaced.

    Args:
        level: Logging level name, case-insensitive
        structured: JSON lines when True, plain text otherwise
    """
    numeric_level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(StructuredFormatter() if structured else PlainFormatter())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False


class ContextLogger:
    """Logger that attaches a fixed context to every record it emits.

    Per-call ``extra`` is merged over the bound context, so a call can
    override a bound key for a single record.
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        self.logger = logging.getLogger(name)
        self.context = dict(context or {})

    def bind(self, **context: Any) -> "ContextLogger":
        """Derive a logger whose context also carries ``context``."""
        return ContextLogger(self.logger.name, {**self.context, **context})

    def _log(
        self,
        level: int,
        msg: str,
        extra: dict[str, Any] | None,
        exc_info: bool = False,
    ) -> None:
        self.logger.log(
            level,
            msg,
            exc_info=exc_info,
            stacklevel=3,
            extra={"extra_fields": {**self.context, **(extra or {})}},
        )

    def debug(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, extra)

    def info(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, extra)

    def warning(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        self._log(logging.WARNING, msg, extra)

    def error(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        self._log(logging.ERROR, msg, extra)

    def exception(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        """Log at ERROR with the traceback of the exception being handled."""
        self._log(logging.ERROR, msg, extra, exc_info=True)
