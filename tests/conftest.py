"""Pytest configuration and fixtures."""

import itertools
import os
from datetime import UTC, datetime

# Keep the app off the on-disk database while tests run
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from pantry.api.dependencies import get_store  # noqa: E402
from pantry.main import app  # noqa: E402
from pantry.services.pantry_store import PantryStore  # noqa: E402
from pantry.services.persistence import MemoryPersistence  # noqa: E402

FIXED_NOW = datetime(2026, 3, 10, 9, 30, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def persistence():
    return MemoryPersistence()


@pytest.fixture
def store(persistence, id_factory, clock):
    """A loaded store seeded with the default storage areas."""
    pantry_store = PantryStore(persistence, id_factory=id_factory, clock=clock)
    pantry_store.load()
    return pantry_store


@pytest.fixture(scope="function")
def client(store):
    """Create a test client backed by the test store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
