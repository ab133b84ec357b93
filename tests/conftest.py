"""Shared pytest fixtures: in-memory database, fakes and seed data."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.infrastructure.database.lifecycle import (
    create_engine_from_settings,
    create_schema,
    create_session_factory,
)
from core.settings import DatabaseSettings
from tests.support import TEST_DATABASE_URL, Catalog, FakeClock, FakeHashFunction, seed_catalog


@pytest.fixture
def database_settings() -> DatabaseSettings:
    return DatabaseSettings(database_url=TEST_DATABASE_URL)


@pytest_asyncio.fixture
async def test_engine(database_settings):
    """Create test database engine with all tables."""
    engine = create_engine_from_settings(database_settings)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Create test session factory."""
    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def catalog(test_session_factory) -> Catalog:
    return await seed_catalog(test_session_factory)


@pytest.fixture
def hash_function() -> FakeHashFunction:
    return FakeHashFunction()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
