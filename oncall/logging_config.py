"""
Logging setup shared by the CLI and the web app.

Format: 2026-01-06T14:05:52Z [oncall] LEVEL message

LOG_LEVEL in the environment wins over the level passed in.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone


class ISO8601Formatter(logging.Formatter):
    def __init__(self, source: str = "oncall"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def _resolve_level(level: int | str | None) -> int:
    env_level = os.getenv("LOG_LEVEL", "").strip().upper()
    if env_level:
        level = env_level
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(source: str = "oncall", level: int | str | None = None) -> logging.Logger:
    """Install a single stdout handler on the root logger and return it."""
    resolved = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(ISO8601Formatter(source=source))
    root_logger.addHandler(handler)

    # request lines from the rota fetch are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger
