"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.github.client import GitHubClient


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET = "test-secret-key"

GITHUB_REPOS = [
    {
        "name": f"repo-{i}",
        "html_url": f"https://github.com/octocat/repo-{i}",
        "description": f"Repository {i}",
        "stargazers_count": i,
        "watchers_count": i,
        "forks_count": 0,
    }
    for i in range(7)
]


def _github_handler(request: httpx.Request) -> httpx.Response:
    """Canned GitHub API: ``octocat`` exists, everyone else is unknown."""
    if request.url.path == "/users/octocat/repos":
        return httpx.Response(200, json=GITHUB_REPOS)
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_seconds=360000,
    )


@pytest.fixture
def github_client() -> GitHubClient:
    """GitHub client answering from canned data instead of the network."""
    return GitHubClient(
        base_url="https://api.github.test",
        token="",
        timeout=1.0,
        transport=httpx.MockTransport(_github_handler),
    )


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the module-level app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    github_client: GitHubClient,
) -> FastAPI:
    """
    Application wired to the test database.

    - Uses an in-memory SQLite database
    - Signs and verifies tokens with the test secret
    - Answers GitHub lookups from canned data
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_auth_service, get_post_service, get_profile_service
    from domain.services.auth_service import AuthService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    # Create a UoW factory that uses test session
    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        test_uow_factory, auth_provider=auth_provider
    )
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        test_uow_factory, github_client=github_client
    )
    app.dependency_overrides[get_post_service] = lambda: PostService(test_uow_factory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    return app


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated client for the test-wired app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def register(
    client: AsyncClient,
    name: str = "Test User",
    email: str = "test@example.com",
    password: str = "secret123",
) -> dict[str, str]:
    """Register a user through the API and return its auth headers."""
    response = await client.post(
        "/api/v1/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def auth_headers(api_client: AsyncClient) -> dict[str, str]:
    """Authorization headers for a freshly registered user."""
    return await register(api_client)


@pytest.fixture
async def other_headers(api_client: AsyncClient) -> dict[str, str]:
    """Authorization headers for a second registered user."""
    return await register(api_client, name="Other User", email="other@example.com")
