"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock text generation client with configurable failure modes
- In-memory database with request-scoped commit/rollback sessions
- Sample transaction histories
"""

from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from creditwise.main import app
from creditwise.core.dependencies import get_text_generation_client
from creditwise.domain.interfaces import TextGenerationClient
from creditwise.infrastructure.database import Base, get_db_session
from tests.integration.support import MockTextGenerationClient, sample_transactions


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_text_client() -> MockTextGenerationClient:
    """Create a mock text generation client."""
    return MockTextGenerationClient()


# =============================================================================
# App Client Fixtures
# =============================================================================

async def _make_client(
    session_factory: async_sessionmaker,
    text_client: TextGenerationClient,
) -> AsyncClient:
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        session = session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_text_generation_client] = lambda: text_client

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker,
    mock_text_client: MockTextGenerationClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database, one session per request
    - Mocks the text generation client
    """
    async with await _make_client(session_factory, mock_text_client) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def client_factory(session_factory: async_sessionmaker):
    """
    Build clients that share the database but use a given text client.

    Usage:
        async with await client_factory(MockTextGenerationClient("fail")) as ac:
            ...
    """
    async def factory(text_client: TextGenerationClient) -> AsyncClient:
        return await _make_client(session_factory, text_client)

    yield factory

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def shopkeeper_transactions() -> List[dict]:
    """Three months of a shopkeeper's transactions."""
    return sample_transactions()


@pytest_asyncio.fixture
async def seeded_user(client: AsyncClient, shopkeeper_transactions: List[dict]) -> str:
    """Save the shopkeeper history for user_shop and return the user id."""
    response = await client.post(
        "/v1/transactions",
        json={"user_id": "user_shop", "transactions": shopkeeper_transactions},
    )
    assert response.status_code == 200
    return "user_shop"
