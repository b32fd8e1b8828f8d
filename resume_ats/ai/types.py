from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class CompletionError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class CompletionOptions:
    model: str | None = None
    temperature: float = 0.7
    max_tokens: int = 500
    system_prompt: str | None = None
    json_mode: bool = False
    skip_cache: bool = False


class AIClient(Protocol):
    def complete(self, prompt: str, options: CompletionOptions) -> str: ...
