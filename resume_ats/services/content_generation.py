from __future__ import annotations

import logging
from dataclasses import dataclass

from resume_ats.ai.types import CompletionError, CompletionOptions
from resume_ats.schemas.resume import SUMMARY_MAX_CHARS, ResumeDocument
from resume_ats.services.completion import CompletionService

logger = logging.getLogger(__name__)

BULLET_COUNT = 5
LINKEDIN_ABOUT_MAX_CHARS = 700

_BULLETS_SYSTEM_PROMPT = (
    "You are an expert resume writer. You ONLY respond with a JSON object of the form "
    '{"bulletPoints": [string, ...]}. Never include any other text or formatting.'
)

_BULLETS_PROMPT = """You are an expert resume writer specializing in ATS-optimized, professional resume content. Generate exactly {count} compelling, metric-driven bullet points for a resume based on the following information.

TARGET JOB TITLE: {job_title}

TARGET JOB DESCRIPTION:
{job_description}

CANDIDATE'S ROLE/COMPANY HISTORY:
{role_history}

REQUIREMENTS FOR EACH BULLET POINT:
1. Start with a strong action verb (Led, Developed, Implemented, Optimized, Spearheaded, Architected, Delivered, Executed, etc.)
2. Include quantifiable metrics where possible (percentages, dollar amounts, time saved, team size, etc.)
3. Align with keywords and requirements from the job description
4. Be specific and demonstrate impact/results
5. Be concise (1-2 lines maximum)
6. Use ATS-friendly formatting (no special characters)
"""

_SUMMARY_PROMPT = """Generate a professional summary for a resume for someone with the job title: "{job_title}".
{context}
The summary should be:
- 2-4 sentences long
- At most {max_chars} characters
- Highlight key strengths and experience relevant to the role
- Use professional language
- Include relevant keywords for ATS optimization
Return only the summary text, no additional formatting."""

_LINKEDIN_ABOUT_PROMPT = """You are a professional career copywriter. Given the following resume content, generate a LinkedIn "About" section (3-5 concise sentences) that highlights strengths, uses professional language, and includes relevant keywords for ATS and recruiter searches. Keep it friendly but professional, and under {max_chars} characters. Return only the text for the About section without extra commentary.

Resume:
{resume_text}"""


@dataclass(frozen=True)
class RoleHistoryItem:
    title: str
    company: str
    duration: str | None = None
    responsibilities: tuple[str, ...] = ()


def _cut_at_sentence(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    cut = text[:limit]
    sentence_end = cut.rfind(". ")
    return cut[: sentence_end + 1] if sentence_end > 0 else cut.rstrip()


def format_role_history(roles: list[RoleHistoryItem]) -> str:
    lines: list[str] = []
    for index, role in enumerate(roles, start=1):
        line = f"{index}. {role.title} at {role.company}"
        if role.duration:
            line += f" ({role.duration})"
        if role.responsibilities:
            line += f"\n   Responsibilities: {'; '.join(role.responsibilities)}"
        lines.append(line)
    return "\n".join(lines)


def generate_bullets(
    service: CompletionService,
    *,
    job_title: str,
    job_description: str,
    roles: list[RoleHistoryItem],
) -> list[str]:
    prompt = _BULLETS_PROMPT.format(
        count=BULLET_COUNT,
        job_title=job_title.strip(),
        job_description=job_description.strip(),
        role_history=format_role_history(roles),
    )
    payload = service.json_complete(
        prompt,
        CompletionOptions(temperature=0.7, max_tokens=1000, system_prompt=_BULLETS_SYSTEM_PROMPT),
    )
    raw = payload.get("bulletPoints")
    bullets = [item.strip() for item in raw if isinstance(item, str) and item.strip()] if isinstance(raw, list) else []
    if not bullets:
        raise CompletionError("Failed to generate bullet points. Please try again.", code="llm_invalid")
    if len(bullets) < BULLET_COUNT - 1:
        logger.warning("ai_bullets_short count=%s", len(bullets))
    return bullets[:BULLET_COUNT]


def generate_summary(
    service: CompletionService,
    *,
    job_title: str,
    job_description: str | None = None,
    skills: list[str] | None = None,
) -> str:
    context_lines: list[str] = []
    if job_description and job_description.strip():
        context_lines.append(f"Target job description:\n{job_description.strip()}")
    if skills:
        context_lines.append(f"Candidate skills: {', '.join(skills)}")
    prompt = _SUMMARY_PROMPT.format(
        job_title=job_title.strip(),
        context="\n".join(context_lines),
        max_chars=SUMMARY_MAX_CHARS,
    )
    summary = service.complete(prompt, CompletionOptions(temperature=0.7, max_tokens=200)).strip()
    return _cut_at_sentence(summary, SUMMARY_MAX_CHARS)


def generate_linkedin_about(service: CompletionService, *, resume: ResumeDocument | str) -> str:
    """LinkedIn "About" text drafted from a structured resume or pasted resume text."""
    if isinstance(resume, ResumeDocument):
        resume_text = resume.model_dump_json(by_alias=True, exclude_none=True)
    else:
        resume_text = resume.strip()
    if not resume_text:
        raise CompletionError("Resume content is required.", code="llm_invalid_request")

    prompt = _LINKEDIN_ABOUT_PROMPT.format(max_chars=LINKEDIN_ABOUT_MAX_CHARS, resume_text=resume_text)
    about = service.complete(prompt, CompletionOptions(temperature=0.7, max_tokens=400)).strip()
    if not about:
        logger.warning("ai_linkedin_about_empty")
        raise CompletionError("AI returned an empty response.", code="llm_invalid")
    return _cut_at_sentence(about, LINKEDIN_ABOUT_MAX_CHARS)
