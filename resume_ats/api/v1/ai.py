from fastapi import APIRouter, Depends, Request

from resume_ats.core.rate_limit import rate_limit
from resume_ats.core.security import require_api_key
from resume_ats.schemas.api import (
    BulletsRequest,
    BulletsResponse,
    KeywordsRequest,
    KeywordsResponse,
    LinkedInAboutRequest,
    LinkedInAboutResponse,
    SummaryRequest,
    SummaryResponse,
)
from resume_ats.services.completion import CompletionService, get_completion_service
from resume_ats.services.content_generation import (
    RoleHistoryItem,
    generate_bullets,
    generate_linkedin_about,
    generate_summary,
)
from resume_ats.services.keyword_extraction import suggest_keywords

router = APIRouter(prefix="/ai", dependencies=[Depends(require_api_key)])

AI_RATE_LIMIT = "20/minute"


@router.post("/keywords", response_model=KeywordsResponse)
@rate_limit(AI_RATE_LIMIT)
def ai_keywords(
    request: Request,
    payload: KeywordsRequest,
    service: CompletionService = Depends(get_completion_service),
):
    _ = request
    suggestion = suggest_keywords(
        service,
        job_description=payload.job_description,
        target_role=payload.target_role,
        resume_text=payload.resume_text,
        existing_keywords=payload.existing_keywords,
    )
    return KeywordsResponse(keywords=suggestion.keywords, source=suggestion.source)


@router.post("/bullets", response_model=BulletsResponse)
@rate_limit(AI_RATE_LIMIT)
def ai_bullets(
    request: Request,
    payload: BulletsRequest,
    service: CompletionService = Depends(get_completion_service),
):
    _ = request
    roles = [
        RoleHistoryItem(
            title=role.title,
            company=role.company,
            duration=role.duration,
            responsibilities=tuple(role.responsibilities),
        )
        for role in payload.role_history
    ]
    bullets = generate_bullets(
        service,
        job_title=payload.job_title,
        job_description=payload.job_description,
        roles=roles,
    )
    return BulletsResponse(
        bullet_points=bullets,
        job_title=payload.job_title,
        tailored_for=payload.job_description[:100],
    )


@router.post("/summary", response_model=SummaryResponse)
@rate_limit(AI_RATE_LIMIT)
def ai_summary(
    request: Request,
    payload: SummaryRequest,
    service: CompletionService = Depends(get_completion_service),
):
    _ = request
    summary = generate_summary(
        service,
        job_title=payload.job_title,
        job_description=payload.job_description,
        skills=payload.skills,
    )
    return SummaryResponse(summary=summary)


@router.post("/linkedin-about", response_model=LinkedInAboutResponse)
@rate_limit(AI_RATE_LIMIT)
def ai_linkedin_about(
    request: Request,
    payload: LinkedInAboutRequest,
    service: CompletionService = Depends(get_completion_service),
):
    _ = request
    source = payload.resume if payload.resume is not None else payload.resume_text
    return LinkedInAboutResponse(about=generate_linkedin_about(service, resume=source))
