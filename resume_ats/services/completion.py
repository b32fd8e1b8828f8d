from __future__ import annotations

import json
import logging
import time
from dataclasses import replace
from functools import lru_cache
from typing import Any

from resume_ats.ai.cache import InMemoryResponseCache, ResponseCache, prompt_cache_key
from resume_ats.ai.factory import get_ai_client
from resume_ats.ai.types import AIClient, CompletionError, CompletionOptions
from resume_ats.core.config import settings

logger = logging.getLogger(__name__)


def _strip_code_fence(content: str) -> str:
    cleaned = content.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


class CompletionService:
    """Text-completion collaborator with an injected response cache.

    Responses are cached by a hash of (prompt, model). A broken cache is
    logged and bypassed; it never fails a completion.
    """

    def __init__(
        self,
        client: AIClient | None,
        *,
        model: str,
        cache: ResponseCache | None = None,
        cache_ttl_s: float | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._cache = cache
        self._cache_ttl_s = cache_ttl_s

    @property
    def enabled(self) -> bool:
        return self._client is not None

    @property
    def cache(self) -> ResponseCache | None:
        return self._cache

    def _cache_get(self, key: str) -> str | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get(key)
        except Exception as exc:  # noqa: BLE001 - cache is best effort
            logger.warning("ai_cache_get_failed: %s", exc)
            return None

    def _cache_set(self, key: str, value: str) -> None:
        if self._cache is None:
            return
        try:
            self._cache.set(key, value, self._cache_ttl_s)
        except Exception as exc:  # noqa: BLE001 - cache is best effort
            logger.warning("ai_cache_set_failed: %s", exc)

    def complete(self, prompt: str, options: CompletionOptions | None = None) -> str:
        if self._client is None:
            raise CompletionError("AI service is temporarily unavailable. Please try again later.", code="llm_disabled")
        if not prompt or not prompt.strip():
            raise CompletionError("Prompt is required and must be a non-empty string.", code="llm_invalid_request")

        opts = options or CompletionOptions()
        model = opts.model or self._model
        opts = replace(opts, model=model)
        key = prompt_cache_key(f"{opts.system_prompt or ''}\n{prompt}", model)

        if not opts.skip_cache:
            cached = self._cache_get(key)
            if cached is not None:
                logger.info("ai_cache_hit model=%s prompt_len=%s", model, len(prompt))
                return cached

        started = time.perf_counter()
        text = self._client.complete(prompt, opts)
        logger.info(
            "ai_completion model=%s prompt_len=%s latency_ms=%s",
            model,
            len(prompt),
            int((time.perf_counter() - started) * 1000),
        )
        self._cache_set(key, text)
        return text

    def json_complete(self, prompt: str, options: CompletionOptions | None = None) -> dict[str, Any]:
        opts = replace(options or CompletionOptions(), json_mode=True)
        content = self.complete(prompt, opts)
        try:
            parsed = json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as exc:
            raise CompletionError("Failed to parse AI response.", code="llm_invalid") from exc
        if not isinstance(parsed, dict):
            raise CompletionError("AI response was not a JSON object.", code="llm_invalid")
        return parsed


@lru_cache(maxsize=1)
def get_completion_service() -> CompletionService:
    cache = InMemoryResponseCache(
        max_entries=settings.ai_cache_max_entries,
        default_ttl_s=settings.ai_cache_ttl_s,
    )
    return CompletionService(
        get_ai_client(),
        model=settings.ai_model,
        cache=cache,
        cache_ttl_s=settings.ai_cache_ttl_s,
    )
