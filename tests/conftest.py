"""
Pytest configuration file.
Every test gets its own SQLite database file, bootstrapped exactly like the
application does at startup, plus mocks for external services.
"""
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.init import initialize
from src.db.session import Database, get_db
from src.main import app
from tests.mocks.services import patch_kafka, mock_db_session, MockKafkaProducer


# Database fixtures
@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """Create and bootstrap a throwaway SQLite database."""
    test_database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test_database.sqlite'}")
    await initialize(test_database.engine)

    yield test_database

    await test_database.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session bound to the test database."""
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# HTTP client fixture
@pytest_asyncio.fixture
async def async_client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async client for testing API endpoints against the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with database.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db, None)


# Mock service fixtures
@pytest.fixture
def mock_kafka() -> Generator[MockKafkaProducer, None, None]:
    """Provide a mock Kafka producer and patch the audit event publisher."""
    mock_kafka_instance, patches = patch_kafka()

    for patch_item in patches:
        patch_item.start()

    yield mock_kafka_instance

    for patch_item in patches:
        patch_item.stop()


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide a mock database session for unit tests."""
    return mock_db_session()
