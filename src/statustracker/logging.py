"""Logging setup for the status tracker.

Everything logs under the ``statustracker`` logger tree. ``setup_logging``
attaches a rotating file handler (and optionally the console) to that root,
with a filter that scrubs GitHub tokens from every record before it is
written. Components obtain their logger through ``get_logger``.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "statustracker"
DEFAULT_LOG_FILE = "statustracker.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_TOKEN_PATTERNS = [
    (re.compile(r"github_pat_[a-zA-Z0-9_]{82}"), "[GITHUB_TOKEN]"),
    (re.compile(r"gh[pousr]_[a-zA-Z0-9]{36}"), "[GITHUB_TOKEN]"),
    (re.compile(r"(Authorization:\s*token\s+)[^\s'\"]+", re.IGNORECASE), r"\1[REDACTED]"),
]


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a component, e.g. ``get_logger("github")``."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def sanitize_for_log(text: str) -> str:
    """Replace GitHub tokens and ``Authorization: token`` values in text."""
    for pattern, replacement in _TOKEN_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def truncate_output(output: str, max_length: int = 500) -> str:
    """Cut long upstream bodies down before they reach the log."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"... [truncated, {len(output) - max_length} more chars]"


class TokenRedactingFilter(logging.Filter):
    """Scrubs GitHub credentials from the formatted message of each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        sanitized = sanitize_for_log(message)
        if sanitized != message:
            record.msg = sanitized
            record.args = None
        return True


def setup_logging(
    log_dir: str | Path,
    level: str = "INFO",
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``statustracker`` logger tree.

    Calling it again replaces the previous handlers.

    Args:
        log_dir: Directory for the log file; created if missing.
        level: Level name (DEBUG, INFO, WARNING, ERROR).
        log_file: File name inside ``log_dir``.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files kept.
        console: Also write to stderr.

    Returns:
        The root ``statustracker`` logger.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    redactor = TokenRedactingFilter()

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(redactor)
        logger.addHandler(handler)

    # httpx logs every request at INFO; one line per tracked item per listing
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info("Logging initialized (level=%s, file=%s)", level.upper(), log_path / log_file)
    return logger
