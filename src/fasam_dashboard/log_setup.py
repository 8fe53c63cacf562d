"""Process logger setup and level-to-tier mapping."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from .models import LogTier


def tier_for_level(level_no: int) -> LogTier:
    """Map a stdlib logging level onto the dashboard's log tiers."""
    if level_no >= logging.ERROR:
        return LogTier.ERROR
    if level_no >= logging.WARNING:
        return LogTier.WARNING
    if level_no >= logging.INFO:
        return LogTier.INFO
    return LogTier.DEBUG


class JsonConsoleFormatter(logging.Formatter):
    """JSON lines for stderr while the dashboard screen is not active."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "tier": tier_for_level(record.levelno).label,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        return json.dumps(event, default=str)


def setup_logger(
    name: str = "fasam_dashboard",
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Create the process-wide logger, writing JSON lines to stderr by default."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
