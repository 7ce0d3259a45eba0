"""
tests/conftest.py -- Shared test fixtures for CredGate integration tests.

This module provides:
  - _make_test_store(): creates an isolated in-memory user store
  - _patch_lifespan(): wires the test store into app.state, bypassing real startup
  - api_client: TestClient with an admin JWT for API integration tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.

The DEBUG env var must be set before any auth module import so get_settings()
auto-generates SECRET_KEY in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# Set DEBUG before any auth/core import so get_settings() can auto-generate
# SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.models import User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password
from core.permissions import derive_permissions

# Rate limits are keyed by client IP and every TestClient request comes from
# the same address; a module of register/login tests would trip them.
limiter.enabled = False

ADMIN_USERNAME = "testadmin"
ADMIN_PASSWORD = "Adm1n-Only!Key#42"


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_store(db_suffix: str) -> UserStore:
    """Create an isolated named shared-memory SQLite store.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    return UserStore(db_url=f"sqlite:///file:test_users_{db_suffix}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(user_store: UserStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> Generator[UserStore, None, None]:
    """Fresh in-memory UserStore, one per test."""
    s = UserStore(db_url="sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, str, int], None, None]:
    """Yield (client, token, user_id) for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan so tests
    hit real route handlers but an isolated in-memory store. An admin user is
    created before the client starts and a JWT is generated for use in
    Authorization headers.
    """
    user_store = _make_test_store(request.module.__name__.replace(".", "_"))

    admin_permissions = derive_permissions("admin").as_list()
    uid = user_store.create_user(
        User(
            username=ADMIN_USERNAME,
            email="admin@example.com",
            role="admin",
            hashed_password=hash_password(ADMIN_PASSWORD),
            permissions=admin_permissions,
            password_strength=100,
        )
    )
    token = create_access_token(uid, ADMIN_USERNAME, "admin", admin_permissions, expire_seconds=3600)

    app.router.lifespan_context = _patch_lifespan(user_store)

    # TrustedHostMiddleware only admits localhost-style hosts.
    with TestClient(app, base_url="http://localhost", raise_server_exceptions=True) as client:
        yield client, token, uid

    user_store.close()
