import os
from datetime import datetime, timezone
from typing import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Import the real FastAPI app
from plantcare.app.main import app as real_app
from plantcare.app.db import (
    get_cadence_days,
    get_catalog_store,
    get_clock,
    get_collection_store,
)
from plantcare.tests.factories import FixedClock, InMemoryCatalogStore, InMemoryCollectionStore


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """Provide the FastAPI application for tests.

    Dependency overrides are wired by the `stores` fixture.
    """
    return real_app


@pytest.fixture(autouse=True)
def _override_test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point DB settings at a test database and keep the watering cadence at its default.

    Tests must never use the runtime database.
    """
    monkeypatch.setenv("DB_HOST", os.getenv("TEST_DB_HOST", "db"))
    monkeypatch.setenv("DB_USER", os.getenv("TEST_DB_USER", "appuser"))
    monkeypatch.setenv("DB_PASSWORD", os.getenv("TEST_DB_PASSWORD", "apppass"))
    monkeypatch.setenv("DB_NAME", os.getenv("TEST_DB_NAME", "plantcare_test"))
    monkeypatch.delenv("WATERING_CADENCE_DAYS", raising=False)

    runtime_db = os.getenv("RUNTIME_DB_NAME", "plantcare")
    test_db = os.getenv("DB_NAME")
    assert test_db != runtime_db, (
        f"Tests are configured to use runtime DB name '{runtime_db}'. "
        f"Set TEST_DB_NAME to a dedicated test DB (e.g., 'plantcare_test')."
    )
    assert test_db and test_db.endswith("_test"), (
        "Test DB name must end with '_test' to avoid collisions (got: %r)" % test_db
    )
    yield


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


@pytest.fixture
def collection_store() -> InMemoryCollectionStore:
    return InMemoryCollectionStore()


@pytest.fixture
def stores(
    app: FastAPI,
    catalog_store: InMemoryCatalogStore,
    collection_store: InMemoryCollectionStore,
    fixed_clock: FixedClock,
) -> Iterator[tuple[InMemoryCatalogStore, InMemoryCollectionStore]]:
    """Swap the MySQL stores and the wall clock for in-memory fakes."""
    app.dependency_overrides[get_catalog_store] = lambda: catalog_store
    app.dependency_overrides[get_collection_store] = lambda: collection_store
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    app.dependency_overrides[get_cadence_days] = lambda: 7
    try:
        yield catalog_store, collection_store
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """httpx AsyncClient bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
