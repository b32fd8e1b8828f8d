from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator

from resume_ats.schemas.resume import CamelModel, ResumeDocument


class ScoreRequest(CamelModel):
    resume: ResumeDocument | None = None
    resume_id: str | None = Field(default=None, min_length=1, max_length=128)
    job_description: str | None = Field(default=None, max_length=50000)
    target_keywords: list[str] | None = Field(default=None, max_length=200)

    @model_validator(mode="after")
    def _require_source(self) -> "ScoreRequest":
        if self.resume is None and not self.resume_id:
            raise ValueError("either resume or resumeId is required")
        if self.resume is not None and self.resume_id:
            raise ValueError("send either resume or resumeId, not both")
        return self


class KeywordsRequest(CamelModel):
    job_description: str | None = Field(default=None, max_length=50000)
    target_role: str | None = Field(default=None, max_length=200)
    resume_text: str | None = Field(default=None, max_length=50000)
    existing_keywords: list[str] = Field(default_factory=list, max_length=200)

    @model_validator(mode="after")
    def _require_context(self) -> "KeywordsRequest":
        if not any(
            (value or "").strip() for value in (self.job_description, self.target_role, self.resume_text)
        ):
            raise ValueError("jobDescription, targetRole or resumeText is required")
        return self


class KeywordsResponse(CamelModel):
    keywords: list[str]
    source: Literal["ai", "heuristic"]


class RoleHistoryEntry(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    duration: str | None = Field(default=None, max_length=100)
    responsibilities: list[str] = Field(default_factory=list, max_length=20)


class BulletsRequest(CamelModel):
    job_title: str = Field(min_length=1, max_length=200)
    job_description: str = Field(min_length=1, max_length=50000)
    role_history: list[RoleHistoryEntry] = Field(min_length=1, max_length=10)


class BulletsResponse(CamelModel):
    bullet_points: list[str]
    job_title: str
    tailored_for: str


class SummaryRequest(CamelModel):
    job_title: str = Field(min_length=1, max_length=200)
    job_description: str | None = Field(default=None, max_length=50000)
    skills: list[str] = Field(default_factory=list, max_length=100)


class SummaryResponse(CamelModel):
    summary: str


class LinkedInAboutRequest(CamelModel):
    resume: ResumeDocument | None = None
    resume_text: str | None = Field(default=None, max_length=50000)

    @model_validator(mode="after")
    def _require_resume(self) -> "LinkedInAboutRequest":
        if self.resume is None and not (self.resume_text or "").strip():
            raise ValueError("either resume or resumeText is required")
        return self


class LinkedInAboutResponse(CamelModel):
    about: str


class StoredResumeResponse(CamelModel):
    resume_id: str
    resume: ResumeDocument
