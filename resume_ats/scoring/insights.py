from __future__ import annotations

from resume_ats.schemas.report import (
    ContentQualityResult,
    KeywordMatchResult,
    MetricInsight,
    ScoreBreakdown,
)
from resume_ats.schemas.resume import ResumeDocument


def _keywords_insight(breakdown: ScoreBreakdown, keywords: KeywordMatchResult, preview: int) -> MetricInsight:
    missing = keywords.missing_keywords[:preview]
    whats_missing: list[str] = []
    recommendations: list[str] = []
    examples: list[str] = []

    if not keywords.computed:
        whats_missing.append(
            "No job description or target keywords were provided, so keyword match could not be measured."
        )
        recommendations.append("Paste the job description or add target keywords to see how well you match.")
    else:
        if not keywords.matched_keywords:
            whats_missing.append(
                "Your resume is not using any of the target keywords. ATS filters are very likely to skip it."
            )
        elif breakdown.keywords < 60:
            whats_missing.append(
                "You are using only a small portion of the keywords hiring managers and ATS look for."
            )
        if missing:
            whats_missing.append(f"You are missing high-value keywords like: {', '.join(missing)}")
            recommendations.append(
                "Add the most relevant missing keywords to your Skills and Work Experience sections where they naturally fit."
            )
            recommendations.append(
                "Mirror language from the job description in your bullet points instead of using only generic terms."
            )
            examples.append(
                f'"Implemented {missing[0]} pipelines to automate data processing, reducing manual effort by 30%."'
            )
            if len(missing) > 1:
                examples.append(
                    f'"Integrated {missing[1]} into the existing stack to improve system reliability and monitoring."'
                )
        elif breakdown.keywords < 100:
            recommendations.append(
                "Review the job description again and add any remaining tools, frameworks, or domain terms."
            )

    return MetricInsight(
        label="Keywords",
        explanation=(
            "Measures how well your resume uses the same language as the job description "
            "and the target keywords that ATS systems scan for."
        ),
        whats_missing=whats_missing,
        recommendations=recommendations,
        examples=examples,
    )


def _formatting_insight(document: ResumeDocument, breakdown: ScoreBreakdown) -> MetricInsight:
    info = document.personal_info
    whats_missing: list[str] = []
    if breakdown.formatting < 60:
        whats_missing.append(
            "Some foundational sections are missing or incomplete, which can confuse ATS parsers."
        )
    if not info.email.strip() or not (info.phone or "").strip():
        whats_missing.append(
            "Your email and/or phone number are missing from the header. Many recruiters will stop right there."
        )
    if len(document.summary.strip()) < 50:
        whats_missing.append("Your professional summary is missing or too short to give context to your experience.")
    if not document.work_history:
        whats_missing.append("Work experience entries are missing, which ATS and recruiters expect even for junior roles.")

    recommendations = [
        "Make sure your resume includes clear sections for Summary, Work Experience, Education, and Skills.",
        "Place contact information (name, email, phone, location, LinkedIn) at the top in plain text.",
    ]
    if not document.education:
        recommendations.append(
            "Add at least one education entry with school, degree, and graduation year or expected graduation."
        )

    return MetricInsight(
        label="Formatting & Core Sections",
        explanation=(
            "Checks that ATS-critical sections like contact info, summary, experience, "
            "and education are present and easy to parse."
        ),
        whats_missing=whats_missing,
        recommendations=recommendations,
        examples=[
            'Add a Summary section: "Senior Software Engineer with 7+ years of experience building scalable web applications and APIs."',
            "Add a clear Work Experience entry with title, company, location, and dates on one line.",
        ],
    )


def _content_insight(document: ResumeDocument, content: ContentQualityResult) -> MetricInsight:
    whats_missing: list[str] = []
    if content.bullet_count == 0:
        whats_missing.append("Your experience section has no achievement bullets yet.")
    elif content.weak_bullets:
        whats_missing.append(
            f"{len(content.weak_bullets)} bullet(s) read as duties rather than achievements."
        )
    if 0 < content.volume_score < 100:
        whats_missing.append(
            f"Only {content.bullet_count} achievement bullet(s) in total; a fuller experience section scores higher."
        )
    if any(not entry.achievements for entry in document.work_history):
        whats_missing.append("Some roles are missing bullet points describing your impact and responsibilities.")

    return MetricInsight(
        label="Content Depth",
        explanation=(
            "Evaluates whether each achievement bullet opens with a strong action verb "
            "and backs it up with a concrete result, and whether you list enough of them."
        ),
        whats_missing=whats_missing,
        recommendations=[
            "Aim for 3-7 bullet points for your most recent roles, focusing on impact and outcomes.",
            "Start every bullet with a strong action verb such as Led, Built, Improved, or Launched.",
        ],
        examples=content.strong_bullet_examples[:2]
        or [
            '"Built and maintained React/TypeScript components used by 50k+ monthly active users."',
            '"Collaborated with designers and PMs to ship features that increased user retention by 15%."',
        ],
    )


def _impact_insight(content: ContentQualityResult) -> MetricInsight:
    whats_missing: list[str] = []
    if content.bullet_count and content.metric_density == 0:
        whats_missing.append(
            "Your bullets do not include numbers (%, $, counts). Metrics make your impact instantly clear to recruiters."
        )
    if content.bullet_count and content.action_verb_ratio < 0.5:
        whats_missing.append("Most bullets start with passive phrasing instead of strong action verbs.")
    if content.passive_bullets:
        whats_missing.append(
            'Some bullets use passive language ("responsible for", "duties included") instead of outcomes.'
        )

    return MetricInsight(
        label="Impact & Achievements",
        explanation=(
            "Looks for metrics and outcome-focused bullets that show how you made a difference, "
            "not just what you were responsible for."
        ),
        whats_missing=whats_missing,
        recommendations=[
            "Add at least one metric to each recent role (%, revenue, time saved, volume handled, etc.).",
            'Rewrite bullets to start with strong action verbs like "Led", "Built", "Improved", or "Owned".',
        ],
        examples=[
            '"Led a team of 4 engineers to deliver a new onboarding flow, increasing activation rate by 18%."',
            '"Improved API response times by 35% by optimizing database queries and caching layers."',
        ],
    )


def build_metric_insights(
    *,
    document: ResumeDocument,
    breakdown: ScoreBreakdown,
    keywords: KeywordMatchResult,
    content: ContentQualityResult,
    missing_preview: int = 5,
) -> dict[str, MetricInsight]:
    return {
        "keywords": _keywords_insight(breakdown, keywords, missing_preview),
        "formatting": _formatting_insight(document, breakdown),
        "content": _content_insight(document, content),
        "impact": _impact_insight(content),
    }
