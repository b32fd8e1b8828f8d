from __future__ import annotations

import re

from resume_ats.core.scoring import get_scoring_value
from resume_ats.schemas.report import BulletAssessment, ContentQualityResult

from .utils import strip_bullet_prefix, to_score, word_tokens

# Involvement verbs ("managed", "helped", "worked") do not count as strong.
ACTION_VERBS = frozenset(
    {
        "accelerated", "achieved", "administered", "analyzed", "architected", "automated",
        "boosted", "built", "championed", "coached", "collaborated", "consolidated",
        "coordinated", "created", "cut", "debugged", "decreased", "delivered", "deployed",
        "designed", "developed", "devised", "directed", "drove", "earned", "eliminated",
        "engineered", "enhanced", "established", "exceeded", "executed", "expanded",
        "founded", "generated", "grew", "headed", "identified", "implemented", "improved",
        "increased", "initiated", "integrated", "introduced", "launched", "led", "mentored",
        "migrated", "modernized", "negotiated", "optimized", "orchestrated", "overhauled",
        "owned", "pioneered", "produced", "redesigned", "reduced", "refactored", "resolved",
        "restructured", "revamped", "saved", "scaled", "secured", "shipped", "simplified",
        "spearheaded", "standardized", "streamlined", "strengthened", "supervised",
        "surpassed", "trained", "transformed", "tripled", "doubled", "won",
    }
)

PASSIVE_PHRASES = (
    "responsible for",
    "duties included",
    "duties include",
    "worked on",
    "helped with",
    "assisted with",
    "participated in",
    "involved in",
    "tasked with",
)

_METRIC_RE = re.compile(
    r"\d|%|[$€£¥₹]|\b(?:hundreds?|thousands?|millions?|billions?|dozens?)\b",
    re.IGNORECASE,
)

ISSUE_NO_BULLETS = "Add measurable achievements to your experience section"
ISSUE_WEAK_BULLETS = (
    "{weak} of {total} achievement bullets have neither a strong action verb nor a measurable result"
)
ISSUE_PASSIVE = 'Replace passive phrasing such as "responsible for" with strong action verbs'


def leading_action_verb(text: str) -> str | None:
    tokens = word_tokens(strip_bullet_prefix(text))
    if not tokens:
        return None
    first = tokens[0].lower()
    return first if first in ACTION_VERBS else None


def has_metric(text: str) -> bool:
    return bool(_METRIC_RE.search(text or ""))


def is_passive(text: str) -> bool:
    lowered = (text or "").lower()
    return any(phrase in lowered for phrase in PASSIVE_PHRASES)


def classify_bullet(text: str) -> BulletAssessment:
    verb = leading_action_verb(text)
    metric = has_metric(text)
    verb_weight = float(get_scoring_value("content.verb_weight", 0.5))
    metric_weight = float(get_scoring_value("content.metric_weight", 0.5))
    score = 100.0 * (verb_weight * (1.0 if verb else 0.0) + metric_weight * (1.0 if metric else 0.0))
    return BulletAssessment(
        text=text,
        action_verb=verb,
        has_metric=metric,
        passive=is_passive(text),
        score=score,
    )


def _volume(bullet_count: int) -> float:
    saturation = max(1, int(get_scoring_value("content.volume_saturation", 8)))
    return 100.0 * min(bullet_count, saturation) / saturation


def evaluate_content(achievements: list[str]) -> ContentQualityResult:
    """Blend per-bullet quality (verb and metric) with how many bullets there are."""
    bullets = [item.strip() for item in achievements if item and item.strip()]
    if not bullets:
        return ContentQualityResult(
            score=int(get_scoring_value("content.empty_floor", 10)),
            issues=[ISSUE_NO_BULLETS],
        )

    assessments = [classify_bullet(bullet) for bullet in bullets]
    total = len(assessments)
    quality = sum(item.score for item in assessments) / total
    volume = _volume(total)
    volume_weight = float(get_scoring_value("content.volume_weight", 0.2))
    blended = (1.0 - volume_weight) * quality + volume_weight * volume
    floor = int(get_scoring_value("content.floor", 10))
    example_limit = int(get_scoring_value("content.strong_examples", 3))

    weak = [item.text for item in assessments if item.is_weak]
    strong = [item.text for item in assessments if item.is_strong][:example_limit]
    passive = [item.text for item in assessments if item.passive]
    verbs_used: list[str] = []
    for item in assessments:
        if item.action_verb and item.action_verb not in verbs_used:
            verbs_used.append(item.action_verb)

    issues: list[str] = []
    if weak:
        issues.append(ISSUE_WEAK_BULLETS.format(weak=len(weak), total=total))
    if passive:
        issues.append(ISSUE_PASSIVE)

    return ContentQualityResult(
        score=max(floor, to_score(blended)),
        quality_score=to_score(quality),
        volume_score=to_score(volume),
        bullet_count=total,
        action_verb_ratio=sum(1 for item in assessments if item.action_verb) / total,
        metric_density=sum(1 for item in assessments if item.has_metric) / total,
        weak_bullets=weak,
        strong_bullet_examples=strong,
        passive_bullets=passive,
        action_verbs_used=verbs_used,
        issues=issues,
    )
