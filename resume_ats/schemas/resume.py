from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_WS_RE = re.compile(r"\s+")

SUMMARY_MAX_CHARS = 500


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _clean_month(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    if not _MONTH_RE.match(stripped):
        raise ValueError("dates must use the YYYY-MM format")
    return stripped


def unique_casefold(values: list[str]) -> list[str]:
    """Collapse case-insensitive duplicates, keeping the first spelling seen."""
    seen: set[str] = set()
    output: list[str] = []
    for raw in values:
        cleaned = _WS_RE.sub(" ", raw or "").strip()
        if not cleaned:
            continue
        key = cleaned.casefold()
        if key in seen:
            continue
        seen.add(key)
        output.append(cleaned)
    return output


class PersonalInfo(CamelModel):
    full_name: str = ""
    email: str = ""
    phone: str | None = None
    location: str | None = None
    title: str | None = None
    linked_in_url: str | None = None
    website_url: str | None = None


class WorkEntry(CamelModel):
    title: str = ""
    company: str = ""
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    achievements: list[str] = Field(default_factory=list)

    @field_validator("start_date", "end_date")
    @classmethod
    def _validate_month(cls, value: str | None) -> str | None:
        return _clean_month(value)

    @model_validator(mode="after")
    def _validate_range(self) -> "WorkEntry":
        if self.is_current:
            self.end_date = None
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self


class EducationEntry(CamelModel):
    institution: str = ""
    degree: str = ""
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _validate_month(cls, value: str | None) -> str | None:
        return _clean_month(value)

    @model_validator(mode="after")
    def _validate_range(self) -> "EducationEntry":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self


class LooseSection(CamelModel):
    """Projects, certifications and custom sections: a bag of text fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str | None = None
    title: str | None = None
    description: str | None = None
    items: list[str] = Field(default_factory=list)

    def text_chunks(self) -> list[str]:
        chunks = [value for value in (self.name, self.title, self.description) if value]
        chunks.extend(item for item in self.items if item)
        for value in (self.model_extra or {}).values():
            if isinstance(value, str) and value:
                chunks.append(value)
        return chunks


class ResumeDocument(CamelModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    work_history: list[WorkEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[LooseSection] = Field(default_factory=list)
    certifications: list[LooseSection] = Field(default_factory=list)
    custom_sections: list[LooseSection] = Field(default_factory=list)
    target_keywords: list[str] = Field(default_factory=list)
    target_job_description: str | None = None

    @field_validator("skills", "target_keywords")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return unique_casefold(value)

    @property
    def is_scorable(self) -> bool:
        info = self.personal_info
        return bool(info.full_name.strip() and info.email.strip())

    def all_achievements(self) -> list[str]:
        bullets: list[str] = []
        for entry in self.work_history:
            bullets.extend(item for item in entry.achievements if item and item.strip())
        return bullets

    def corpus_text(self) -> str:
        chunks: list[str] = []
        if self.personal_info.title:
            chunks.append(self.personal_info.title)
        if self.summary:
            chunks.append(self.summary)
        for entry in self.work_history:
            if entry.title:
                chunks.append(entry.title)
        chunks.extend(self.all_achievements())
        chunks.extend(self.skills)
        for section in (*self.projects, *self.certifications, *self.custom_sections):
            chunks.extend(section.text_chunks())
        return "\n".join(chunks)

