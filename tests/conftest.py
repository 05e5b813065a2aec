"""Shared test fixtures.

Provides:
- Admin login settings (whitelisted email + bcrypt hash) via environment
- Settings cache reset around every test that changes the environment
- A bearer token for the whitelisted admin

No database is required: API tests swap in an in-memory quote repository.
"""

from __future__ import annotations

import pytest

from src.app.config import get_settings
from src.app.core.security import create_access_token, hash_password

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(scope="session")
def admin_password_hash() -> str:
    """bcrypt is slow, hash once per session."""
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture
def admin_env(monkeypatch, admin_password_hash):
    """Configure a single whitelisted admin for the duration of a test."""
    monkeypatch.setenv("ADMIN_EMAILS", f"{ADMIN_EMAIL}, Ops@Example.com")
    monkeypatch.setenv("ADMIN_PASSWORD_HASH", admin_password_hash)
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("QUOTE_LIST_LIMIT", "3")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def admin_credentials(admin_env) -> dict[str, str]:
    """Login payload for the whitelisted admin."""
    return {"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}


@pytest.fixture
def admin_token(admin_env) -> str:
    return create_access_token({"sub": ADMIN_EMAIL, "role": "admin"})


@pytest.fixture
def auth_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
