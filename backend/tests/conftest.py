"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- Storage fixtures (in-memory SQLite key-value table)
- HTTP client and admin token fixtures
"""

import os
import sys
from pathlib import Path

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test_secret_key_at_least_32_characters_long_for_jwt"
os.environ["ACCESS_TOKEN_EXPIRE_HOURS"] = "24"
os.environ["PASSWORD_HASH_SCHEME"] = "sha256"
os.environ["LOG_JSON"] = "false"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


ADMIN_USERNAME = "root"
ADMIN_PASSWORD = "secret1"


@pytest.fixture(scope="function")
async def db_tables():
    """
    Create the kv_entries table before a test and drop it afterwards.

    Every test starts from an empty store.
    """
    from navsite.core.database import engine
    from navsite.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def kv_store(db_tables):
    """SQL key-value store on the test database."""
    from navsite.core.database import async_session_maker
    from navsite.services.kv_store import SQLKeyValueStore

    return SQLKeyValueStore(async_session_maker)


@pytest.fixture
async def client(db_tables):
    """HTTP client talking to the app in-process."""
    from httpx import ASGITransport, AsyncClient
    from navsite.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def admin_token(client):
    """Set up the admin account and return a fresh session token."""
    response = await client.post(
        "/api/auth/setup",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
