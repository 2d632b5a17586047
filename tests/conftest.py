"""Pytest fixtures for the Task API tests."""

import pytest
from fastapi.testclient import TestClient

from taskapi.main import create_app
from taskapi.store import TaskStore


@pytest.fixture
def store() -> TaskStore:
    """Create an empty, isolated task store."""
    return TaskStore()


@pytest.fixture
def client(store: TaskStore) -> TestClient:
    """Create a test client for an app serving the store fixture."""
    return TestClient(create_app(store))
