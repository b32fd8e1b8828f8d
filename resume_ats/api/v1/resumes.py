import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status

from resume_ats.core.rate_limit import rate_limit
from resume_ats.core.resume_store import ResumeStore, get_resume_store
from resume_ats.core.security import require_api_key
from resume_ats.schemas.api import StoredResumeResponse
from resume_ats.schemas.resume import ResumeDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", dependencies=[Depends(require_api_key)])

ResumeId = Annotated[str, Path(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_-]+$")]


@router.put("/{resume_id}", response_model=StoredResumeResponse)
@rate_limit()
def put_resume(
    request: Request,
    document: ResumeDocument,
    resume_id: ResumeId,
    store: ResumeStore = Depends(get_resume_store),
):
    _ = request
    store.save(resume_id, document)
    logger.info("resume_saved resume_id=%s", resume_id)
    return StoredResumeResponse(resume_id=resume_id, resume=document)


@router.get("/{resume_id}", response_model=StoredResumeResponse)
@rate_limit()
def get_resume(
    request: Request,
    resume_id: ResumeId,
    store: ResumeStore = Depends(get_resume_store),
):
    _ = request
    document = store.load(resume_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found.")
    return StoredResumeResponse(resume_id=resume_id, resume=document)


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
@rate_limit()
def delete_resume(
    request: Request,
    resume_id: ResumeId,
    store: ResumeStore = Depends(get_resume_store),
):
    _ = request
    if not store.delete(resume_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found.")
    logger.info("resume_deleted resume_id=%s", resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
