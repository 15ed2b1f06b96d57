"""Fixtures for API route tests."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from statustracker.api.app import create_app
from statustracker.api.dependencies import get_tracker_service
from statustracker.config import Settings
from statustracker.tracker import TrackerService
from statustracker.tracker_store import TrackerStore


@pytest.fixture
def store():
    """Create an in-memory TrackerStore."""
    s = TrackerStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def mock_github(make_live_item) -> MagicMock:
    """Create a mock GitHub client returning a default live item."""
    client = MagicMock()
    client.fetch_item.return_value = make_live_item()
    return client


@pytest.fixture
def service(store: TrackerStore, mock_github: MagicMock) -> TrackerService:
    return TrackerService(store=store, client=mock_github, max_workers=2)


@pytest.fixture
def app(service: TrackerService) -> FastAPI:
    """Create the app with the tracker service overridden."""
    app = create_app(Settings(db_path=":memory:"))

    def override_get_tracker_service():
        yield service

    app.dependency_overrides[get_tracker_service] = override_get_tracker_service
    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
