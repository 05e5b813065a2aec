"""FastAPI dependency injection for authentication.

Admin endpoints declare ``admin: AdminUser = Depends(get_current_admin)``.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status
from pydantic import BaseModel

from src.app.config import get_settings
from src.app.core.security import verify_token


class AdminUser(BaseModel):
    """Authenticated admin console user."""

    email: str
    role: str = "admin"


async def get_current_admin(request: Request) -> AdminUser:
    """Extract and validate the current admin from a Bearer JWT.

    Raises:
        HTTPException(401): If no valid token is provided.
        HTTPException(403): If the token subject is no longer whitelisted.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(auth_header[7:], token_type="access")
    email = str(payload.get("sub") or "").lower()

    # Whitelist is re-checked so removing an admin revokes live tokens
    if email not in get_settings().admin_email_list():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return AdminUser(email=email, role=payload.get("role", "admin"))
