from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_UPSTREAM_BASE_URL_ENV = "RAINFALL_UPSTREAM_BASE_URL"
_UPSTREAM_TIMEOUT_ENV = "RAINFALL_UPSTREAM_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_UPSTREAM_BASE_URL = "https://environment.data.gov.uk"
DEFAULT_UPSTREAM_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    upstream_base_url: str
    upstream_timeout: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: float) -> float:
    value = os.getenv(_UPSTREAM_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        upstream_base_url=_read_str_env(
            _UPSTREAM_BASE_URL_ENV, DEFAULT_UPSTREAM_BASE_URL
        ).rstrip("/"),
        upstream_timeout=_read_timeout(DEFAULT_UPSTREAM_TIMEOUT),
        log_level=_read_log_level("INFO"),
    )
