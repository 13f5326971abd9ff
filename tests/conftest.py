import os
import tempfile
import threading
from pathlib import Path

# Must be set before taskapi.app.config builds its settings singleton.
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="taskapi-tests-"))
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'testtasks.db'}"

import pytest
from fastapi.testclient import TestClient

from taskapi.app.adapters.repo_sql import SQLAlchemyTaskRepository
from taskapi.app.config import Settings
from taskapi.app.main import create_app

# All scenarios share one stateful database; each holds this lock for its lifetime.
_STORE_LOCK = threading.Lock()


@pytest.fixture(scope="session")
def app_client():
    app = create_app(Settings())
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(app_client):
    """TestClient with exclusive access to a freshly truncated task table."""
    with _STORE_LOCK:
        SQLAlchemyTaskRepository(app_client.app.state.engine).truncate()
        yield app_client
        app_client.app.dependency_overrides.clear()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'tasks.db'}"
