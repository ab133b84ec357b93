"""Pytest configuration and fixtures for integration tests."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from apps.api.main import create_app
from core.settings import ApiSettings, AppSettings, CatalogSettings, DatabaseSettings
from tests.support import (
    TEST_DATABASE_URL,
    Catalog,
    FakeClock,
    FakeHashFunction,
    seed_catalog,
)


@pytest.fixture
def app_settings() -> AppSettings:
    """Settings pointing the app at an in-memory database."""
    return AppSettings(
        database=DatabaseSettings(database_url=TEST_DATABASE_URL),
        catalog=CatalogSettings(default_page_size=12, recent_products_count=12),
        api=ApiSettings(log_level="WARNING"),
    )


@pytest.fixture
def test_client(app_settings) -> Iterator[TestClient]:
    """Create FastAPI test client; the lifespan creates the schema."""
    app = create_app(app_settings, hash_function=FakeHashFunction(), clock=FakeClock())

    with TestClient(app) as client:
        yield client


@pytest.fixture
def catalog(test_client) -> Catalog:
    """Seed catalog rows on the app's own event loop."""
    session_factory = test_client.app.state.session_factory
    return test_client.portal.call(seed_catalog, session_factory)
