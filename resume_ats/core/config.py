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
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    scoring_config_path: str | None
    ai_enabled: bool
    ai_provider: str
    ai_model: str
    openai_api_key: str | None
    openai_base_url: str | None
    ai_timeout_s: float
    ai_max_retries: int
    ai_cache_ttl_s: int
    ai_cache_max_entries: int
    ai_cache_purge_interval_s: int
    resume_store_db_path: str
    taxonomy_synonyms_path: str | None


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    ai_enabled=_get_env_bool("AI_ENABLED", True),
    ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
    ai_model=(_get_env("AI_MODEL", "gpt-4o-mini") or "gpt-4o-mini").strip(),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 20.0),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 2),
    ai_cache_ttl_s=_get_env_int("AI_CACHE_TTL_S", 30 * 24 * 3600),
    ai_cache_max_entries=_get_env_int("AI_CACHE_MAX_ENTRIES", 1024),
    ai_cache_purge_interval_s=_get_env_int("AI_CACHE_PURGE_INTERVAL_S", 3600),
    resume_store_db_path=_get_env("RESUME_STORE_DB_PATH", "data/resumes.db") or "data/resumes.db",
    taxonomy_synonyms_path=_get_env("TAXONOMY_SYNONYMS_PATH"),
)

if settings.ai_provider not in {"openai"}:
    raise RuntimeError("AI_PROVIDER must be 'openai'.")

if settings.ai_cache_ttl_s <= 0:
    raise RuntimeError("AI_CACHE_TTL_S must be a positive number of seconds.")
