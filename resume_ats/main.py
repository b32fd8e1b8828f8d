import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_ats.ai.types import CompletionError
from resume_ats.api.v1.ai import router as ai_router
from resume_ats.api.v1.health import router as health_router
from resume_ats.api.v1.resumes import router as resumes_router
from resume_ats.api.v1.score import router as score_router
from resume_ats.core.cors import cors_allow_credentials, cors_allowed_origins
from resume_ats.core.rate_limit import limiter
from resume_ats.core.config import settings
from resume_ats.core.lifespan import lifespan
from resume_ats.scoring.errors import InvalidInputShape

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)

COMPLETION_ERROR_STATUS = {
    "llm_disabled": status.HTTP_503_SERVICE_UNAVAILABLE,
    "llm_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "llm_rate_limited": status.HTTP_429_TOO_MANY_REQUESTS,
    "llm_invalid_request": status.HTTP_400_BAD_REQUEST,
    "llm_invalid": status.HTTP_502_BAD_GATEWAY,
}

app = FastAPI(title="Resume ATS Scorer API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(InvalidInputShape)
async def invalid_input_shape_handler(request: Request, exc: InvalidInputShape):
    logger.warning("invalid_input_shape path=%s errors=%s", request.url.path, len(exc.errors))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "code": exc.code, "errors": exc.errors},
    )


@app.exception_handler(CompletionError)
async def completion_error_handler(request: Request, exc: CompletionError):
    status_code = COMPLETION_ERROR_STATUS.get(exc.code, status.HTTP_503_SERVICE_UNAVAILABLE)
    logger.warning("completion_failed path=%s code=%s: %s", request.url.path, exc.code, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": exc.code})


app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(score_router, prefix="/v1", tags=["Score"])
app.include_router(ai_router, prefix="/v1", tags=["AI"])
app.include_router(resumes_router, prefix="/v1", tags=["Resumes"])
