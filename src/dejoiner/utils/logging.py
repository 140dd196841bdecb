"""Logging for dejoiner commands, the indexer and the store."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

ROOT_LOGGER = "dejoiner"

logger = logging.getLogger(ROOT_LOGGER)


def _context_of(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


def _short_name(name: str) -> str:
    """Drop the package prefix: ``dejoiner.search.engine`` -> ``search.engine``."""
    prefix = f"{ROOT_LOGGER}."
    return name[len(prefix) :] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log files and log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = _context_of(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Compact stderr lines: ``WARNING  store: Skipped row index=2``."""

    LEVEL_COLORS = {
        "DEBUG": "\033[2m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:<8}"
        if self.use_color and record.levelname in self.LEVEL_COLORS:
            level = f"{self.LEVEL_COLORS[record.levelname]}{level}{self.RESET}"

        line = f"{level} {_short_name(record.name)}: {record.getMessage()}"
        context = _context_of(record)
        if context:
            line += " " + " ".join(f"{key}={value}" for key, value in context.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure the ``dejoiner`` logger.

    Console output goes to stderr so that stdout stays clean for
    ``--format json``. A log file, when configured, is always written as
    JSON lines. Calling this again replaces the previous handlers.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        JSONFormatter() if json_format else ConsoleFormatter(use_color=use_color)
    )
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log ``message`` with key/value fields such as ``query`` or ``resource``.

    The fields travel on the record as ``record.context`` and are rendered
    by both formatters.
    """
    logger.log(level, message, extra={"context": context})
