from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    ai_enabled: bool
    ai_timeout_s: float
    ai_max_retries: int
    resume_min_chars: int
    history_db_path: str
    history_max_entries: int
    history_snippet_chars: int
    analytics_enabled: bool
    analytics_db_path: str
    analytics_retention_days: int
    fallback_unknown_role_mode: str
    fallback_unknown_role_match: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    ai_enabled=_get_env_bool("AI_ENABLED", True),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 0),
    resume_min_chars=_get_env_int("RESUME_MIN_CHARS", 50),
    history_db_path=_get_env("HISTORY_DB_PATH", "data/history.db") or "data/history.db",
    history_max_entries=_get_env_int("HISTORY_MAX_ENTRIES", 10),
    history_snippet_chars=_get_env_int("HISTORY_SNIPPET_CHARS", 120),
    analytics_enabled=_get_env_bool("ANALYTICS_ENABLED", True),
    analytics_db_path=_get_env("ANALYTICS_DB_PATH", "data/analytics.db") or "data/analytics.db",
    analytics_retention_days=_get_env_int("ANALYTICS_RETENTION_DAYS", 180),
    fallback_unknown_role_mode=(_get_env("FALLBACK_UNKNOWN_ROLE_MODE", "random") or "random").strip().lower(),
    fallback_unknown_role_match=_get_env_int("FALLBACK_UNKNOWN_ROLE_MATCH", 55),
)

if settings.fallback_unknown_role_mode not in {"random", "fixed"}:
    raise RuntimeError("FALLBACK_UNKNOWN_ROLE_MODE must be either 'random' or 'fixed'.")

if settings.resume_min_chars < 1:
    raise RuntimeError("RESUME_MIN_CHARS must be a positive integer.")

if settings.history_max_entries < 1:
    raise RuntimeError("HISTORY_MAX_ENTRIES must be a positive integer.")
