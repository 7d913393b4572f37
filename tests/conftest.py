"""
Shared pytest fixtures for AuthVault tests.

The environment is configured before anything from ``authvault`` is
imported: settings are read once at import time. Every test gets a
fresh schema in a temporary SQLite database.
"""

import os
import tempfile

from passlib.context import CryptContext

ADMIN_PASSWORD = "admin-pass"

_db_dir = tempfile.mkdtemp(prefix="authvault-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'authvault.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_PASSWORD_HASH"] = CryptContext(schemes=["bcrypt"], bcrypt__rounds=4).hash(ADMIN_PASSWORD)
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "10000"
os.environ["API_LOG_ENABLED"] = "true"
os.environ["ENVIRONMENT"] = "testing"

import httpx
import pytest
import pytest_asyncio

from authvault.adapters.outbound.persistence.database import AsyncSessionLocal, engine
from authvault.adapters.outbound.persistence.models import Base
from authvault.adapters.outbound.persistence.repositories import client_repository
from authvault.domain.models.client_domain_model import Scope
from authvault.main import app
from authvault.shared.middleware.rate_limiting_middleware import async_rate_limiter


@pytest_asyncio.fixture
async def db_engine():
    """Recreate every table, then release pooled connections after the test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await async_rate_limiter.reset()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    async with AsyncSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine):
    """HTTP client talking to the application in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}


@pytest.fixture
def make_client(db_engine):
    """
    Factory registering a client directly in the credential store.

    Returns (client_id, plain_secret).
    """

    async def _make_client(scope: Scope, is_active: bool = True, owner: str = "acme", name: str = "Test client"):
        async with AsyncSessionLocal() as session:
            db_client, secret = await client_repository.create_with_credentials(
                session, name=name, scope=scope, owner=owner
            )
            if not is_active:
                await client_repository.update(session, db_obj=db_client, obj_in={"is_active": False})
            await session.commit()
            return db_client.client_id, secret

    return _make_client


@pytest.fixture
def get_token(client):
    """Factory obtaining an access token over HTTP."""

    async def _get_token(client_id: str, client_secret: str, scope: Scope) -> str:
        response = await client.post("/oauth/token", json={
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
            "scope": scope.value,
        })
        assert response.status_code == 200, response.text
        return response.json()["access_token"]

    return _get_token


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
