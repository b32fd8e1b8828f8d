from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from resume_ats.core.scoring import get_scoring_value
from resume_ats.schemas.report import (
    ContentQualityResult,
    KeywordMatchResult,
    ScoreBreakdown,
    ScoreReport,
)
from resume_ats.schemas.resume import ResumeDocument
from resume_ats.taxonomy import TaxonomyProvider

from .content import evaluate_content
from .errors import InvalidInputShape
from .insights import build_metric_insights
from .keywords import evaluate_keywords
from .sections import evaluate_sections
from .utils import to_score

logger = logging.getLogger(__name__)

CATEGORY_ORDER = ("keywords", "content", "impact", "formatting")

ISSUE_MISSING_KEYWORDS = "Missing important keywords from the job description: {preview}"
ISSUE_NO_METRICS = "None of your achievements include measurable results (numbers, %, $)"
ISSUE_FEW_METRICS = "Fewer than half of your achievements include measurable results"
ISSUE_FEW_VERBS = "Most achievement bullets do not start with a strong action verb"

SUGGESTIONS = {
    "keywords": (
        "Add the most relevant missing keywords from the job description to your "
        "Skills and Work Experience sections"
    ),
    "content": (
        "Rewrite achievement bullets to open with an action verb and include a measurable "
        'result (e.g., "Reduced deployment time by 40%")'
    ),
    "impact": "Quantify the impact of each recent role with numbers, percentages, or dollar amounts",
    "formatting": "Complete the core sections: contact details, summary, work experience, education, and skills",
}
SUGGESTION_NO_TARGET = "Paste a job description or add target keywords to measure keyword match"
SUGGESTION_ALL_GOOD = "Your resume is well-optimized for ATS systems"

RISK_SECTIONS = "Missing or incomplete core sections (contact, summary, experience, education)."
RISK_KEYWORDS = "Very low keyword match: ATS filters may never show your resume to a recruiter."
RISK_EMPTY_RECENT_ROLE = "Your most recent role does not include any bullet points describing your work."
RISK_PASSIVE = 'Using passive language ("responsible for", "duties include") instead of action verbs.'
RISK_NOT_SCORABLE = "A full name and email address are required before this resume can be submitted."


def _coerce_document(document: Any) -> ResumeDocument:
    if isinstance(document, ResumeDocument):
        return document
    if isinstance(document, Mapping):
        try:
            return ResumeDocument.model_validate(dict(document))
        except ValidationError as exc:
            raise InvalidInputShape(
                "Resume document failed validation.",
                errors=exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc
    raise InvalidInputShape(f"Expected a resume document or mapping, got {type(document).__name__}.")


def _coerce_job_description(job_description: Any) -> str | None:
    if job_description is None or isinstance(job_description, str):
        return job_description
    raise InvalidInputShape(f"Job description must be a string, got {type(job_description).__name__}.")


def _coerce_keywords(target_keywords: Any) -> list[str] | None:
    if target_keywords is None:
        return None
    if isinstance(target_keywords, (str, bytes)) or not isinstance(target_keywords, Iterable):
        raise InvalidInputShape("Target keywords must be a list of strings.")
    values = list(target_keywords)
    if not all(isinstance(value, str) for value in values):
        raise InvalidInputShape("Target keywords must be a list of strings.")
    if isinstance(target_keywords, (set, frozenset)):
        values.sort(key=str.casefold)
    return values


def _impact(content: ContentQualityResult) -> tuple[int, list[str]]:
    floor = int(get_scoring_value("impact.floor", 10))
    if content.bullet_count == 0:
        return floor, []

    metric_weight = float(get_scoring_value("impact.metric_weight", 0.7))
    verb_weight = float(get_scoring_value("impact.verb_weight", 0.3))
    raw = 100.0 * (metric_weight * content.metric_density + verb_weight * content.action_verb_ratio)

    issues: list[str] = []
    if content.metric_density == 0:
        issues.append(ISSUE_NO_METRICS)
    elif content.metric_density < 0.5:
        issues.append(ISSUE_FEW_METRICS)
    if content.action_verb_ratio < 0.5:
        issues.append(ISSUE_FEW_VERBS)
    return max(floor, to_score(raw)), issues


def _keyword_issues(keywords: KeywordMatchResult) -> list[str]:
    if not keywords.computed or not keywords.missing_keywords:
        return []
    threshold = int(get_scoring_value("keywords.issue_threshold", 60))
    if keywords.score >= threshold:
        return []
    preview = int(get_scoring_value("keywords.missing_preview", 5))
    return [ISSUE_MISSING_KEYWORDS.format(preview=", ".join(keywords.missing_keywords[:preview]))]


def _weights() -> dict[str, float]:
    return {key: float(get_scoring_value(f"weights.{key}", 0.0)) for key in CATEGORY_ORDER}


def _overall(breakdown: ScoreBreakdown, weights: dict[str, float]) -> int:
    total_weight = sum(weights.values()) or 1.0
    weighted = sum(getattr(breakdown, key) * weight for key, weight in weights.items()) / total_weight
    floor = int(get_scoring_value("overall.floor", 20))
    return max(floor, to_score(weighted))


def _pass_rate(overall: int) -> str:
    if overall >= int(get_scoring_value("overall.pass_rate.high", 85)):
        return "high"
    if overall >= int(get_scoring_value("overall.pass_rate.medium", 70)):
        return "medium"
    return "low"


def _risks(
    document: ResumeDocument,
    breakdown: ScoreBreakdown,
    keywords: KeywordMatchResult,
    content: ContentQualityResult,
) -> list[str]:
    risks: list[str] = []
    if not document.is_scorable:
        risks.append(RISK_NOT_SCORABLE)
    if breakdown.formatting < 50:
        risks.append(RISK_SECTIONS)
    if keywords.computed and breakdown.keywords < 40:
        risks.append(RISK_KEYWORDS)
    if document.work_history and not any(item.strip() for item in document.work_history[0].achievements):
        risks.append(RISK_EMPTY_RECENT_ROLE)
    if content.passive_bullets:
        risks.append(RISK_PASSIVE)
    return risks


def score_resume(
    document: ResumeDocument | Mapping[str, Any],
    job_description: str | None = None,
    target_keywords: Iterable[str] | None = None,
    *,
    taxonomy: TaxonomyProvider | None = None,
) -> ScoreReport:
    """Score a resume for ATS compatibility.

    Pure and deterministic: the same document, job description and keywords
    always produce the same report. Sparse documents get low scores and
    explanatory issues; only structurally wrong input raises
    ``InvalidInputShape``.
    """
    resume = _coerce_document(document)
    job_text = _coerce_job_description(job_description)
    keyword_list = _coerce_keywords(target_keywords)

    sections = evaluate_sections(resume)
    keywords = evaluate_keywords(resume, job_text, keyword_list, taxonomy=taxonomy)
    content = evaluate_content(resume.all_achievements())
    impact_score, impact_issues = _impact(content)

    breakdown = ScoreBreakdown(
        keywords=keywords.score,
        formatting=sections.score,
        content=content.score,
        impact=impact_score,
    )
    weights = _weights()
    overall = _overall(breakdown, weights)

    issues_by_category = {
        "keywords": _keyword_issues(keywords),
        "content": content.issues,
        "impact": impact_issues,
        "formatting": sections.issues,
    }
    severity = sorted(CATEGORY_ORDER, key=lambda key: (-weights[key], CATEGORY_ORDER.index(key)))

    issues: list[str] = []
    suggestions: list[str] = []
    for category in severity:
        category_issues = issues_by_category[category]
        for issue in category_issues:
            if issue not in issues:
                issues.append(issue)
        if category_issues:
            suggestions.append(SUGGESTIONS[category])
    if not keywords.computed:
        suggestions.append(SUGGESTION_NO_TARGET)
    if not suggestions:
        suggestions.append(SUGGESTION_ALL_GOOD)

    report = ScoreReport(
        overall_score=overall,
        breakdown=breakdown,
        issues=issues,
        suggestions=suggestions,
        metric_insights=build_metric_insights(
            document=resume,
            breakdown=breakdown,
            keywords=keywords,
            content=content,
            missing_preview=int(get_scoring_value("keywords.missing_preview", 5)),
        ),
        matched_keywords=keywords.matched_keywords,
        missing_keywords=keywords.missing_keywords,
        weak_bullets=content.weak_bullets,
        strong_bullet_examples=content.strong_bullet_examples,
        keyword_match_computed=keywords.computed,
        pass_rate=_pass_rate(overall),
        risks=_risks(resume, breakdown, keywords, content),
    )
    logger.info(
        "ats_score_computed overall=%s keywords=%s formatting=%s content=%s impact=%s keyword_match=%s",
        overall,
        breakdown.keywords,
        breakdown.formatting,
        breakdown.content,
        breakdown.impact,
        keywords.computed,
    )
    return report
