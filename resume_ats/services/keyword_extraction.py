from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from resume_ats.ai.types import CompletionError, CompletionOptions
from resume_ats.schemas.resume import unique_casefold
from resume_ats.scoring.keywords import extract_keywords
from resume_ats.services.completion import CompletionService

logger = logging.getLogger(__name__)

_PROMPT = """You are an ATS optimization assistant. Extract and generate the most important keywords and key phrases that should appear in a resume so it ranks well for this role.

Return a JSON object with this exact shape:
{{
  "keywords": string[]
}}

Guidelines:
- Focus on skills, tools, technologies, certifications, and core responsibilities.
- Include both single-word and short multi-word phrases.
- Do not include full sentences.
- Avoid duplicates and very generic words like "and", "the", "responsible", etc.
- Use Title Case where appropriate (e.g., "Project Management", "Customer Service").

Context:
Target Role: {target_role}
Job Description: {job_description}
Resume Text: {resume_text}
Existing Keywords: {existing}
"""


@dataclass(frozen=True)
class KeywordSuggestion:
    keywords: list[str] = field(default_factory=list)
    source: Literal["ai", "heuristic"] = "heuristic"


def _clean_keywords(raw: Any, limit: int) -> list[str]:
    if not isinstance(raw, list):
        return []
    values = [item for item in raw if isinstance(item, str)]
    return unique_casefold(values)[:limit]


def build_keywords_prompt(
    *,
    job_description: str | None,
    target_role: str | None,
    resume_text: str | None,
    existing_keywords: list[str],
) -> str:
    return _PROMPT.format(
        target_role=(target_role or "").strip() or "Not specified",
        job_description=(job_description or "").strip() or "Not provided",
        resume_text=(resume_text or "").strip() or "Not provided",
        existing=", ".join(existing_keywords) or "None",
    )


def suggest_keywords(
    service: CompletionService,
    *,
    job_description: str | None = None,
    target_role: str | None = None,
    resume_text: str | None = None,
    existing_keywords: list[str] | None = None,
    limit: int = 40,
) -> KeywordSuggestion:
    """Produce target keywords for the scorer, preferring the completion service.

    Any AI failure degrades to frequency-based extraction over the job
    description (or role, or resume text); this never raises.
    """
    existing = unique_casefold(existing_keywords or [])

    if service.enabled:
        prompt = build_keywords_prompt(
            job_description=job_description,
            target_role=target_role,
            resume_text=resume_text,
            existing_keywords=existing,
        )
        try:
            payload = service.json_complete(
                prompt,
                CompletionOptions(temperature=0.4, max_tokens=600),
            )
            keywords = _clean_keywords(payload.get("keywords"), limit)
            if keywords:
                return KeywordSuggestion(keywords=keywords, source="ai")
            logger.warning("ai_keywords_empty prompt_len=%s", len(prompt))
        except CompletionError as exc:
            logger.warning("ai_keywords_fallback code=%s: %s", exc.code, exc)

    corpus = next(
        (text for text in (job_description, target_role, resume_text) if text and text.strip()),
        "",
    )
    return KeywordSuggestion(keywords=extract_keywords(corpus, limit=limit) if corpus else [], source="heuristic")
