from resume_ats.ai.config import load_ai_config
from resume_ats.ai.types import AIClient

from resume_ats.ai.providers.openai_provider import OpenAIProvider


def get_ai_client() -> AIClient | None:
    cfg = load_ai_config()
    if not cfg.enabled:
        return None

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, api_key=cfg.api_key)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
