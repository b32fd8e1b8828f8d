from fastapi import APIRouter

from resume_ats.core.scoring import get_scoring_value

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the scorer.")
async def health_check():
    return {
        "status": "healthy",
        "weights": {
            name: get_scoring_value(f"weights.{name}")
            for name in ("keywords", "content", "impact", "formatting")
        },
    }
