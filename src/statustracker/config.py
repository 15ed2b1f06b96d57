"""Configuration loading from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_DB_PATH = "data/issues.db"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_FETCH_TIMEOUT = 5.0
DEFAULT_MAX_WORKERS = 8
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read once at startup."""

    db_path: str = DEFAULT_DB_PATH
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    github_token: str | None = None
    github_api_url: str = DEFAULT_API_URL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_token(self) -> bool:
        """Whether requests to GitHub are authenticated."""
        return bool(self.github_token)


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _read_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _read_log_level(env: Mapping[str, str]) -> str:
    raw = (env.get("STATUSTRACKER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if raw not in LOG_LEVELS:
        allowed = ", ".join(LOG_LEVELS)
        raise ConfigError(f"STATUSTRACKER_LOG_LEVEL must be one of {allowed}, got {raw!r}")
    return raw


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings from environment variables.

    Args:
        env: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Settings populated from the environment, with defaults for unset keys.

    Raises:
        ConfigError: If a numeric variable or the log level is invalid.
    """
    if env is None:
        env = os.environ

    db_path = env.get("STATUSTRACKER_DB_PATH") or env.get("DB_PATH") or DEFAULT_DB_PATH

    return Settings(
        db_path=db_path,
        host=env.get("STATUSTRACKER_HOST") or DEFAULT_HOST,
        port=_read_int(env, "PORT", DEFAULT_PORT),
        github_token=env.get("GITHUB_TOKEN") or None,
        github_api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        fetch_timeout=_read_float(env, "STATUSTRACKER_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
        max_workers=_read_int(env, "STATUSTRACKER_MAX_WORKERS", DEFAULT_MAX_WORKERS),
        log_dir=env.get("STATUSTRACKER_LOG_DIR") or DEFAULT_LOG_DIR,
        log_level=_read_log_level(env),
    )
