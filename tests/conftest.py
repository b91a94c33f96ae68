"""Shared pytest fixtures."""

import os
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Keep a developer's real key out of the tests
os.environ.pop("GEMINI_API_KEY", None)

from main import app, get_generator  # noqa: E402
from generator import StoryGenerator  # noqa: E402
from relay_client import RelayClient  # noqa: E402
from storage import LocalStorage  # noqa: E402
from story_client import StoryClient  # noqa: E402


@pytest.fixture
def mock_generator():
    return MagicMock(spec=StoryGenerator)


@pytest.fixture
def client(mock_generator):
    """Relay test client with the upstream generator mocked out."""
    app.dependency_overrides[get_generator] = lambda: mock_generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(mock_generator):
    """Relay test client that returns 500 responses instead of re-raising server errors."""
    app.dependency_overrides[get_generator] = lambda: mock_generator
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client(monkeypatch):
    """Relay test client with no API key configured."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def mock_relay():
    return MagicMock(spec=RelayClient)


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 5, 1, 14, 30, 15)


@pytest.fixture
def story_client(mock_relay, storage, fixed_clock):
    return StoryClient(mock_relay, storage, clock=fixed_clock)
