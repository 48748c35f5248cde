"""Logging setup shared by both transports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

logger = logging.getLogger("ghl_mcp")


# Custom handler that flushes immediately
class FlushFileHandler(logging.FileHandler):
    def emit(self, record):
        super().emit(record)
        self.flush()


def configure_logging(console: bool = True, log_path: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """Attach file and console handlers to the ``ghl_mcp`` logger.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        console: Also log to stderr. The STDIO transport turns this off.
        log_path: Log file location (default: settings.log_path)
        level: Level name (default: settings.log_level)

    Returns:
        The configured package logger.
    """
    level_value = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(level_value)
    logger.propagate = False  # Don't propagate to root logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    path = Path(log_path or settings.log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = FlushFileHandler(path, mode="a")
    file_handler.setLevel(level_value)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level_value)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.info("GHL MCP Server logger initialized")
    return logger
