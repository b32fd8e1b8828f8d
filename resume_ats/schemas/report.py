from __future__ import annotations

from typing import Literal

from pydantic import Field

from resume_ats.schemas.resume import CamelModel

PassRate = Literal["high", "medium", "low"]
MetricKey = Literal["keywords", "formatting", "content", "impact"]


class SectionCheck(CamelModel):
    check_id: str
    passed: bool
    points: int


class SectionResult(CamelModel):
    score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    checks: list[SectionCheck] = Field(default_factory=list)


class KeywordMatchResult(CamelModel):
    score: int = Field(ge=0, le=100)
    candidates: list[str] = Field(default_factory=list)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    variant_matches: list[str] = Field(default_factory=list)
    computed: bool = True


class BulletAssessment(CamelModel):
    text: str
    action_verb: str | None = None
    has_metric: bool = False
    passive: bool = False
    score: float = 0.0

    @property
    def is_strong(self) -> bool:
        return self.action_verb is not None and self.has_metric

    @property
    def is_weak(self) -> bool:
        return self.action_verb is None and not self.has_metric


class ContentQualityResult(CamelModel):
    score: int = Field(ge=0, le=100)
    quality_score: int = Field(default=0, ge=0, le=100)
    volume_score: int = Field(default=0, ge=0, le=100)
    bullet_count: int = 0
    action_verb_ratio: float = 0.0
    metric_density: float = 0.0
    weak_bullets: list[str] = Field(default_factory=list)
    strong_bullet_examples: list[str] = Field(default_factory=list)
    passive_bullets: list[str] = Field(default_factory=list)
    action_verbs_used: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class ScoreBreakdown(CamelModel):
    keywords: int = Field(ge=0, le=100)
    formatting: int = Field(ge=0, le=100)
    content: int = Field(ge=0, le=100)
    impact: int = Field(ge=0, le=100)


class MetricInsight(CamelModel):
    label: str
    explanation: str
    whats_missing: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)


class ScoreReport(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    metric_insights: dict[MetricKey, MetricInsight]
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    weak_bullets: list[str] = Field(default_factory=list)
    strong_bullet_examples: list[str] = Field(default_factory=list)
    keyword_match_computed: bool = False
    pass_rate: PassRate = "low"
    risks: list[str] = Field(default_factory=list)
