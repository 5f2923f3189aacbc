"""Shared fixtures for backend tests."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


def _uid() -> str:
    """Return a short unique suffix for test isolation."""
    return uuid.uuid4().hex[:8]


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch, tmp_path):
    """Cheap bcrypt rounds and a per-test images directory."""
    from blogapi.config import settings

    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(settings, "IMAGES_DIR", str(tmp_path / "images"))
    monkeypatch.setattr(settings, "AUTH_SECRET_KEY", "test-secret-0123456789abcdef012345")


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """A fresh SQLite database with all tables for each test."""
    from blogapi.db.models import Base

    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}", echo=False, future=True)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(eng, class_=AsyncSession, expire_on_commit=False)
    yield factory
    await eng.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """Async test client with ``get_db`` bound to the per-test database."""
    from blogapi.db.engine import get_db
    from blogapi.main import app

    async def override_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def call(client):
    """Invoke a named operation: ``await call("posts", {"page": 1}, token=...)``."""

    async def _call(operation: str, variables: dict | None = None, token: str | None = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return await client.post(
            "/graphql",
            json={"operation": operation, "variables": variables or {}},
            headers=headers,
        )

    return _call


@pytest.fixture
def signup(call):
    """Register a user and log in; returns ``(user_id, token, email)``."""

    async def _signup(name: str = "Alice", password: str = "secret123"):
        email = f"{name.lower()}-{_uid()}@blog.io"
        resp = await call(
            "createUser",
            {"userInput": {"email": email, "name": name, "password": password}},
        )
        assert resp.status_code == 200, resp.text
        resp = await call("login", {"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        data = resp.json()["data"]["login"]
        return data["userId"], data["token"], email

    return _signup
