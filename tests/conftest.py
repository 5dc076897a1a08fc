"""
Test configuration for the wonlink backend.

Settings are read at import time, so the environment is prepared before
app.main is imported. Both Supabase clients (anon and service role) are
replaced with one in-memory FakeSupabase per test, as is the per-request
auth client; its request-scoped storage is bound to the fake's auth so the
PKCE code verifier cookie can be observed.
"""
import os

os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SITE_URL"] = ""

import pytest
import pytest_asyncio
from fastapi import Depends
from httpx import ASGITransport, AsyncClient

from app.database.supabase_client import (
    RequestAuthStorage, get_auth_storage, get_auth_supabase, get_supabase, get_service_supabase
)
from app.main import app
from tests.fake_supabase import FakeSupabase


@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    app.dependency_overrides[get_supabase] = lambda: fake
    app.dependency_overrides[get_service_supabase] = lambda: fake

    def auth_client(storage: RequestAuthStorage = Depends(get_auth_storage)):
        fake.auth.storage = storage
        return fake

    app.dependency_overrides[get_auth_supabase] = auth_client
    yield fake
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(fake_supabase):
    """Async httpx client using ASGI transport; no live server or Supabase needed."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def signed_in(fake_supabase):
    """Register a bearer token for a user id and return the auth headers."""
    def _signed_in(user_id="u1", email="jane@example.com"):
        user = fake_supabase.auth.make_user(user_id, email)
        fake_supabase.auth.add_token(f"token-{user_id}", user)
        return {"Authorization": f"Bearer token-{user_id}"}
    return _signed_in
