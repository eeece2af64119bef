"""Shared fixtures.

Network access is never needed: the page fetcher is built on
``httpx.MockTransport`` and the app's dependencies are swapped through
``app.dependency_overrides``.
"""

import pytest
from fastapi.testclient import TestClient

from helpers import make_fetcher
from seoreport.dependencies import get_fetcher, get_providers, get_store
from seoreport.main import app
from seoreport.services.store import ReportStore


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear the slowapi in-memory counter before every test."""
    app.state.limiter._storage.reset()
    yield


@pytest.fixture
def store(tmp_path) -> ReportStore:
    report_store = ReportStore(str(tmp_path / "reports.db"))
    report_store.init_db()
    return report_store


@pytest.fixture
def api(store):
    """A TestClient wired to a temporary store and no assistant providers."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_providers] = lambda: []
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_site():
    """Return a setter that decides how the target site answers."""

    def _use(handler):
        app.dependency_overrides[get_fetcher] = lambda: make_fetcher(handler)

    return _use
