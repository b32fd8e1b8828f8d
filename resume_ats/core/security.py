from __future__ import annotations

from fastapi import Header, HTTPException, status

from resume_ats.core.config import settings

_AUTH_ERROR = "Please provide a valid API key to use the scorer."


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_AUTH_ERROR,
        )


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    check_api_key(x_api_key)
