"""
CopyCart Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for failure injection
    ├── db_engine / db_session: in-memory SQLite with the products table
    ├── make_marketing_service: MarketingService on an httpx.MockTransport
    └── test_client: HTTPX AsyncClient wired to the app with the test database
"""

import os

# Must run before any copycart import reads the settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["HUGGINGFACE_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from copycart.database import Base, get_db_session
from copycart.models.product import Product  # noqa: F401
from copycart.services.huggingface_service import HuggingFaceService
from copycart.services.marketing_service import MarketingService, get_marketing_service

TEST_API_URL = "https://inference.test/models/HuggingFaceH4/zephyr-7b-beta"
TEST_MARKER = "actionable marketing tip."


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_marketing_service() -> Callable[..., MarketingService]:
    """
    Builds a MarketingService whose inference calls go to `handler`.

    Usage:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"generated_text": "..."}])

        service = make_marketing_service(handler)
    """

    def _make(handler, marker: str = TEST_MARKER) -> MarketingService:
        client = HuggingFaceService(
            api_url=TEST_API_URL,
            api_key="test-key-not-real",
            transport=httpx.MockTransport(handler),
        )
        return MarketingService(client=client, reply_marker=marker)

    return _make


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The store dependency points at the in-memory database. Tests that call
    /ai endpoints set `app.dependency_overrides[get_marketing_service]`.
    """
    from copycart.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def use_marketing_service():
    """Installs a MarketingService for the /ai routes of the app under test."""
    from copycart.main import app

    def _use(service: MarketingService) -> None:
        app.dependency_overrides[get_marketing_service] = lambda: service

    return _use
