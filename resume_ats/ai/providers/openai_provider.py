from __future__ import annotations

from typing import Optional

import openai
from openai import OpenAI

from resume_ats.ai.types import CompletionError, CompletionOptions
from resume_ats.core.config import settings


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self._model = model
        key = (api_key or settings.openai_api_key or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = OpenAI(
            api_key=key,
            base_url=(base_url or settings.openai_base_url or None),
            timeout=timeout_s if timeout_s is not None else settings.ai_timeout_s,
            max_retries=max_retries if max_retries is not None else settings.ai_max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    def complete(self, prompt: str, options: CompletionOptions) -> str:
        messages = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        messages.append({"role": "user", "content": prompt})

        create_kwargs = {
            "model": options.model or self._model,
            "messages": messages,
            "temperature": _clamp(options.temperature, 0.0, 2.0),
            "max_tokens": int(_clamp(options.max_tokens, 1, 4000)),
        }
        if options.json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**create_kwargs)
        except openai.RateLimitError as exc:
            raise CompletionError("AI service rate limit reached. Please try again in a moment.", code="llm_rate_limited") from exc
        except openai.AuthenticationError as exc:
            raise CompletionError("AI service authentication failed.", code="llm_unavailable") from exc
        except openai.OpenAIError as exc:
            raise CompletionError(f"AI service request failed: {exc}", code="llm_unavailable") from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content or not content.strip():
            raise CompletionError("AI service returned an empty response.", code="llm_invalid")
        return content.strip()
