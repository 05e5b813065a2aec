"""Admin console login endpoint."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from src.app.core.security import authenticate_admin, create_access_token

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    """Exchange admin credentials for a JWT access token."""
    email = body.email.strip().lower()
    if not authenticate_admin(email, body.password):
        logger.warning("auth.login_failed", email=email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    logger.info("auth.login_succeeded", email=email)
    token = create_access_token({"sub": email, "role": "admin"})
    return TokenResponse(access_token=token)
