from dataclasses import dataclass

from resume_ats.core.config import settings

_PLACEHOLDER_PREFIXES = ("your_", "replace_", "sk-your")


@dataclass(frozen=True)
class AIConfig:
    enabled: bool
    provider: str
    model: str
    api_key: str | None


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith(_PLACEHOLDER_PREFIXES) or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    api_key = (settings.openai_api_key or "").strip() or None
    enabled = settings.ai_enabled and bool(api_key) and not _looks_like_placeholder(api_key or "")
    return AIConfig(
        enabled=enabled,
        provider=settings.ai_provider,
        model=settings.ai_model,
        api_key=api_key,
    )
