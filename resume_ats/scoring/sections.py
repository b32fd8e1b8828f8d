from __future__ import annotations

import re

from resume_ats.core.scoring import get_scoring_value
from resume_ats.schemas.report import SectionCheck, SectionResult
from resume_ats.schemas.resume import SUMMARY_MAX_CHARS, ResumeDocument

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ISSUE_FULL_NAME = "Add your full name"
ISSUE_EMAIL = "Add a valid email address"
ISSUE_PHONE = "Add a phone number"
ISSUE_LOCATION = "Add your location or a LinkedIn profile"
ISSUE_SUMMARY = "Add a professional summary"
ISSUE_SUMMARY_SHORT = "Expand your professional summary to at least {min_chars} characters"
ISSUE_SUMMARY_LONG = f"Shorten your professional summary to {SUMMARY_MAX_CHARS} characters or fewer"
ISSUE_WORK = "Add work experience"
ISSUE_EDUCATION = "Add education"
ISSUE_SKILLS = "Add skills"
ISSUE_SKILLS_STUFFED = "Trim your skills list to the {max_skills} most relevant entries"


def _points(name: str) -> int:
    return int(get_scoring_value(f"sections.points.{name}", 0))


def _work_points(count: int) -> int:
    if count <= 0:
        return 0
    raw = _points("work_first") + _points("work_each_extra") * (count - 1)
    return min(_points("work_cap"), raw)


def _skills_points(count: int) -> int:
    if count <= 0:
        return 0
    sweet_min = int(get_scoring_value("sections.skills.sweet_spot_min", 15))
    sweet_max = int(get_scoring_value("sections.skills.sweet_spot_max", 40))
    rewarded = min(count, sweet_min)
    raw = _points("skills_first") + _points("skills_each_extra") * (rewarded - 1)
    points = min(_points("skills_cap"), raw)
    if count > sweet_max:
        points -= int(get_scoring_value("sections.skills.stuffing_penalty", 5))
    return max(0, points)


def evaluate_sections(document: ResumeDocument) -> SectionResult:
    info = document.personal_info
    summary = document.summary.strip()
    summary_min = int(get_scoring_value("sections.summary_min_chars", 50))
    sweet_max = int(get_scoring_value("sections.skills.sweet_spot_max", 40))

    checks: list[SectionCheck] = []
    issues: list[str] = []

    def record(check_id: str, passed: bool, points: int, issue: str | None) -> None:
        checks.append(SectionCheck(check_id=check_id, passed=passed, points=points if passed else 0))
        if not passed and issue:
            issues.append(issue)

    record("full_name", bool(info.full_name.strip()), _points("full_name"), ISSUE_FULL_NAME)
    record("email", bool(EMAIL_RE.match(info.email.strip())), _points("email"), ISSUE_EMAIL)
    record("phone", bool((info.phone or "").strip()), _points("phone"), ISSUE_PHONE)
    has_locator = any((value or "").strip() for value in (info.location, info.linked_in_url, info.website_url))
    record("location_or_profile", has_locator, _points("location_or_profile"), ISSUE_LOCATION)

    if not summary:
        record("summary", False, _points("summary"), ISSUE_SUMMARY)
    else:
        record(
            "summary",
            len(summary) >= summary_min,
            _points("summary"),
            ISSUE_SUMMARY_SHORT.format(min_chars=summary_min),
        )
        if len(summary) > SUMMARY_MAX_CHARS:
            issues.append(ISSUE_SUMMARY_LONG)

    work_count = len(document.work_history)
    record("work_history", work_count > 0, _work_points(work_count), ISSUE_WORK)
    record("education", bool(document.education), _points("education"), ISSUE_EDUCATION)

    skills_count = len(document.skills)
    record("skills", skills_count > 0, _skills_points(skills_count), ISSUE_SKILLS)
    if skills_count > sweet_max:
        issues.append(ISSUE_SKILLS_STUFFED.format(max_skills=sweet_max))

    total = sum(check.points for check in checks)
    floor = int(get_scoring_value("sections.floor", 20))
    score = max(floor, min(100, total))
    return SectionResult(score=score, issues=issues, checks=checks)
