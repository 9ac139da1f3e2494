"""
Shared fixtures: in-memory SQLite engine, services, and an HTTP client
talking to the ASGI app directly.
"""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest
import pytest_asyncio

from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from config.settings import Settings
from database.session import build_engine, build_session_factory, create_tables
from main import create_app
from utils.storage import InMemoryObjectStorage

SECRET = "test-only-signing-secret-0123456789abcdef"


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=SECRET,
        bcrypt_rounds=4,
        auto_migrate=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def engine(settings):
    eng = build_engine(settings)
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = build_session_factory(engine)
    async with factory() as s:
        yield s


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def signer() -> TokenSigner:
    return TokenSigner(secret=SECRET, ttl=timedelta(hours=1))


@pytest.fixture
def object_storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage()


@pytest.fixture
def app(settings, engine, object_storage):
    return create_app(settings, engine=engine, object_storage=object_storage)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def register_and_login(client: httpx.AsyncClient, email: str, password: str = "secret1") -> dict:
    """Register ``email`` and return auth headers for it."""
    resp = await client.post("/api/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    resp = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
