"""
Pytest configuration and shared fixtures.

Provides fixtures for a temporary data file, store, repository, API test
client and sample documents used across the test suite.
"""

import json
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from tasklist.core.api.app import create_app
from tasklist.core.config import TasklistConfig, clear_cache
from tasklist.core.tasks import JsonTaskStore, TaskRepository

# ==============================================================================
# Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config, env vars and the config cache out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in (
        "TASKLIST_DATA_FILE",
        "TASKLIST_HOST",
        "TASKLIST_PORT",
        "TASKLIST_CORS_ORIGINS",
        "TASKLIST_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Storage Fixtures
# ==============================================================================


@pytest.fixture
def data_file(tmp_path) -> Path:
    """Path for a task document that does not exist yet."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def store(data_file) -> JsonTaskStore:
    """Store backed by the temporary data file."""
    return JsonTaskStore(data_file)


@pytest.fixture
def repository(store) -> TaskRepository:
    """Repository over the temporary store."""
    return TaskRepository(store)


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A document with a gap in ids (task 2 was deleted)."""
    return {
        "tasks": [
            {"id": 1, "title": "Buy milk", "completed": False},
            {"id": 3, "title": "Call mom", "completed": True},
            {"id": 4, "title": "Write report", "completed": False},
        ],
        "nextId": 5,
    }


@pytest.fixture
def populated_file(data_file, sample_document) -> Path:
    """Data file pre-filled with sample_document."""
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text(json.dumps(sample_document, indent=2))
    return data_file


# ==============================================================================
# API Fixtures
# ==============================================================================


@pytest.fixture
def client(repository) -> TestClient:
    """TestClient for an app wired to the temporary repository."""
    app = create_app(repository=repository, config=TasklistConfig())
    return TestClient(app)
