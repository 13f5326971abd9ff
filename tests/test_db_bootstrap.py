from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect

from taskapi.app.config import Settings
from taskapi.app.core.errors import StoreBootstrapError
from taskapi.app.db import bootstrap_database, create_storage_handle
from taskapi.app.main import create_app


def test_bootstrap_creates_file_table_and_wal(tmp_path):
    db_file = tmp_path / "nested" / "dir" / "tasks.db"
    url = f"sqlite:///{db_file}"

    bootstrap_database(url)
    bootstrap_database(url)  # idempotent

    assert db_file.exists()
    engine = create_engine(url)
    try:
        assert "task" in inspect(engine).get_table_names()
        columns = {c["name"] for c in inspect(engine).get_columns("task")}
        assert columns == {"id", "task"}
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA journal_mode").scalar() == "wal"
    finally:
        engine.dispose()


def test_storage_handle_is_bounded_pool(db_url):
    bootstrap_database(db_url)
    engine = create_storage_handle(db_url, pool_size=7, pool_timeout=2.5)
    try:
        assert engine.pool.size() == 7
        assert engine.pool._max_overflow == 0
        assert engine.pool.timeout() == 2.5
    finally:
        engine.dispose()


def test_bootstrap_unopenable_location_is_fatal(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("plain file")

    with pytest.raises(StoreBootstrapError) as excinfo:
        bootstrap_database(f"sqlite:///{blocker}/tasks.db")
    assert excinfo.value.operation == "bootstrap"


def test_app_refuses_to_start_without_database(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("plain file")
    app = create_app(Settings(APP_ENV="test", DATABASE_URL=f"sqlite:///{blocker}/tasks.db"))

    with pytest.raises(StoreBootstrapError):
        with TestClient(app):
            pass


def test_app_lifespan_opens_and_closes_storage_handle(db_url):
    app = create_app(Settings(APP_ENV="test", DATABASE_URL=db_url))
    with TestClient(app) as client:
        assert app.state.engine is not None
        assert client.get("/tasks").json() == []
    assert app.state.engine is None
    assert Path(db_url.replace("sqlite:///", "")).exists()
