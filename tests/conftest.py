"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("GITHUB_CLIENT_ID", "test-client-id")
os.environ.setdefault("GITHUB_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("APP_URL", "http://test")

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ghlogin.auth.errors import OAuth2RequestError
from ghlogin.auth.models import OAuth2Tokens
from ghlogin.auth.oauth import GitHub, get_github_client
from ghlogin.db.database import get_db
from ghlogin.main import app
from ghlogin.models import Base, User
from ghlogin.utils.http_client import get_http_client


# Test database URL (uses SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeGitHub:
    """Stands in for the GitHub OAuth client.

    Codes are single use, like on github.com.
    """

    def __init__(self) -> None:
        self.codes: list[str] = []
        self.error: Exception | None = None
        self.access_token = "gho_test_token"
        self._real = GitHub(
            "test-client-id",
            "test-client-secret",
            redirect_uri="http://test/login/github/callback",
        )

    def create_authorization_url(self, state: str, scopes: list[str] | None = None) -> str:
        return self._real.create_authorization_url(state, scopes)

    async def validate_authorization_code(self, code: str) -> OAuth2Tokens:
        if code in self.codes:
            self.codes.append(code)
            raise OAuth2RequestError("bad_verification_code", "The code passed is incorrect or expired.")
        self.codes.append(code)
        if self.error:
            raise self.error
        return OAuth2Tokens(access_token=self.access_token)


class FakeGitHubAPI:
    """Serves GET /user through httpx.MockTransport."""

    def __init__(self) -> None:
        self.profile: dict = {"id": "1001", "login": "octocat"}
        self.status_code = 200
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error
        return httpx.Response(self.status_code, json=self.profile)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on a fresh in-memory database."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def github_api() -> FakeGitHubAPI:
    return FakeGitHubAPI()


@pytest_asyncio.fixture
async def api_client(github_api: FakeGitHubAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """httpx client whose requests are answered by `github_api`."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(github_api.handler)) as client:
        yield client


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    github: FakeGitHub,
    api_client: httpx.AsyncClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with GitHub and the database replaced."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_github_client] = lambda: github
    app.dependency_overrides[get_http_client] = lambda: api_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a user already linked to GitHub id 1001."""
    user = User(id="existinguser0001", github_id=1001, username="octocat")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user
