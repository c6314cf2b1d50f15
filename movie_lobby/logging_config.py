"""
Logging configuration for Movie Lobby.

One factory for every logger in the project (API, store, server). Each
record is tagged with the ID of the HTTP request it was emitted under,
or ``-`` outside a request.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Add request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def setup_logger(
    name: str,
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Attach a daily file handler and a stdout handler to a named logger.

    Args:
        name: Logger name; its last dotted part names the log file
        log_dir: Directory for log files (defaults to ./logs)
        level: Logging level

    Returns:
        The configured logger. Calling again for the same name returns
        it unchanged.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    log_dir = log_dir or Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    stem = name.rsplit(".", 1)[-1]
    log_file = log_dir / f"{stem}_{datetime.now():%Y%m%d}.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in (logging.FileHandler(log_file), logging.StreamHandler(sys.stdout)):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(RequestIdFilter())
        logger.addHandler(handler)

    return logger


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:8]


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_var.set(request_id)
