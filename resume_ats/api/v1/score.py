from fastapi import APIRouter, Depends, HTTPException, Request, status

from resume_ats.core.rate_limit import rate_limit
from resume_ats.core.resume_store import ResumeStore, get_resume_store
from resume_ats.core.security import require_api_key
from resume_ats.schemas.api import ScoreRequest
from resume_ats.schemas.report import ScoreReport
from resume_ats.scoring import score_resume

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post(
    "/score",
    response_model=ScoreReport,
    summary="Score a resume",
    description="Compute the ATS compatibility report for an inline or stored resume.",
)
@rate_limit()
def score(
    request: Request,
    payload: ScoreRequest,
    store: ResumeStore = Depends(get_resume_store),
):
    _ = request
    document = payload.resume
    if document is None:
        document = store.load(payload.resume_id or "")
        if document is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found.")
    return score_resume(document, payload.job_description, payload.target_keywords)
