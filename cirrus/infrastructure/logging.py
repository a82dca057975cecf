"""
Centralized Logging

Architectural Intent:
- Provides structured JSON logging for all Cirrus components
- Centralizes log configuration to avoid scattered print() calls
- Supports configurable log levels via CLI flags (--verbose, --debug)
- The TUI owns the terminal, so logs can be routed to a file instead of stderr
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Optional


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure logging for the Cirrus application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSON structured output. Otherwise human-readable.
        log_file: Write to this file instead of stderr.
    """
    root = logging.getLogger("cirrus")
    root.setLevel(level)

    # Remove existing handlers
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    """Map a config log_level string such as "debug" to a logging constant."""
    value = logging.getLevelName(name.upper()) if name else default
    return value if isinstance(value, int) else default
