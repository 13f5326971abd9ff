import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, QueuePool

from .core.errors import StoreBootstrapError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def _connect_args(database_url: str, busy_timeout_ms: int) -> dict:
    if not _is_sqlite(database_url):
        return {}
    # SQLite requires check_same_thread=False for usage across threads
    return {"check_same_thread": False, "timeout": busy_timeout_ms / 1000.0}


def _ensure_sqlite_parent_dir(database_url: str) -> None:
    database = make_url(database_url).database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def _apply_sqlite_pragmas(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA journal_mode=WAL")
        finally:
            cursor.close()


def bootstrap_database(database_url: str, busy_timeout_ms: int = 5000) -> None:
    """Create the database if missing, switch it to WAL and apply the task schema.

    Runs on a throwaway unpooled connection that is closed before returning.
    Any failure is fatal for the process and is raised as StoreBootstrapError.
    """
    from . import models  # noqa: F401  (registers the task table on Base)

    try:
        if _is_sqlite(database_url):
            _ensure_sqlite_parent_dir(database_url)
        engine = create_engine(
            database_url,
            connect_args=_connect_args(database_url, busy_timeout_ms),
            poolclass=NullPool,
        )
    except (SQLAlchemyError, OSError, ValueError) as exc:
        raise StoreBootstrapError(
            f"could not open database_url {database_url}: {exc}",
            operation="bootstrap",
            cause=exc,
        ) from exc

    try:
        with engine.connect() as conn:
            if _is_sqlite(database_url):
                mode = conn.exec_driver_sql("PRAGMA journal_mode=WAL").scalar()
                logger.info("database journal_mode=%s url=%s", mode, database_url)
            Base.metadata.create_all(bind=conn)
            conn.commit()
    except SQLAlchemyError as exc:
        raise StoreBootstrapError(
            f"could not prepare schema in {database_url}: {exc}",
            operation="bootstrap",
            cause=exc,
        ) from exc
    finally:
        engine.dispose()


def create_storage_handle(
    database_url: str,
    *,
    pool_size: int = 50,
    pool_timeout: float = 30.0,
    busy_timeout_ms: int = 5000,
) -> Engine:
    """Return the pooled engine shared by every request for the process lifetime."""

    engine = create_engine(
        database_url,
        connect_args=_connect_args(database_url, busy_timeout_ms),
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
    )
    if _is_sqlite(database_url):
        _apply_sqlite_pragmas(engine)
    logger.info("storage handle ready url=%s pool_size=%s", database_url, pool_size)
    return engine


def prepare_database(
    database_url: str,
    *,
    pool_size: int = 50,
    pool_timeout: float = 30.0,
    busy_timeout_ms: int = 5000,
) -> Engine:
    bootstrap_database(database_url, busy_timeout_ms=busy_timeout_ms)
    return create_storage_handle(
        database_url,
        pool_size=pool_size,
        pool_timeout=pool_timeout,
        busy_timeout_ms=busy_timeout_ms,
    )
