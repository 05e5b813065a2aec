"""JWT authentication and password hashing for the admin console.

Admins are a fixed email whitelist (ADMIN_EMAILS) sharing one bcrypt password
hash (ADMIN_PASSWORD_HASH). A successful login yields a short-lived JWT access
token carrying the admin email as ``sub``.

Uses bcrypt directly (not passlib) for Python 3.13 compatibility.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import bcrypt
import structlog
from fastapi import HTTPException, status
from jose import JWTError, jwt

from src.app.config import get_settings

logger = structlog.get_logger(__name__)

# ── Password Hashing ──────────────────────────────────────────────────────────


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against its bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in configuration
        logger.warning("auth.invalid_password_hash")
        return False


def authenticate_admin(email: str, password: str) -> bool:
    """Return True when email is whitelisted and password matches the admin hash."""
    settings = get_settings()
    if not settings.ADMIN_PASSWORD_HASH:
        return False
    if email.strip().lower() not in settings.admin_email_list():
        return False
    return verify_password(password, settings.ADMIN_PASSWORD_HASH)


# ── JWT Tokens ────────────────────────────────────────────────────────────────


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token.

    The data dict should contain at minimum:
    - sub: admin email (str)
    - role: "admin"
    """
    settings = get_settings()
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access",
    })
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, token_type: str = "access") -> dict:
    """Decode and validate a JWT token.

    Raises:
        HTTPException(401): If the token is invalid, expired, or of the wrong type.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    if payload.get("type") != token_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type: expected {token_type}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload
