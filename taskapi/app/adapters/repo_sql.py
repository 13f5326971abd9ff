import logging
from typing import List, NoReturn, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DisconnectionError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import sessionmaker

from taskapi.app.core.errors import NotFound, StoreError, StoreUnavailable
from taskapi.app.core.logging_config import store_event
from taskapi.app.models import Task as TaskRow
from taskapi.app.schemas import Task
from taskapi.ports.task_repository import ITaskRepository

logger = logging.getLogger(__name__)

_UNAVAILABLE = (PoolTimeoutError, OperationalError, DisconnectionError)

# SQLite INTEGER is a signed 64-bit value; larger ids cannot match any row
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _storable_id(task_id: int) -> bool:
    return _MIN_ID <= task_id <= _MAX_ID


class SQLAlchemyTaskRepository(ITaskRepository):
    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessions = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    def _fail(
        self, operation: str, exc: SQLAlchemyError, task_id: Optional[int] = None
    ) -> NoReturn:
        logger.error(
            "store operation failed: %s",
            exc,
            extra=store_event(operation, task_id),
        )
        error_cls = StoreUnavailable if isinstance(exc, _UNAVAILABLE) else StoreError
        raise error_cls(str(exc), operation=operation, cause=exc) from exc

    def insert(self, task_text: str) -> Task:
        try:
            with self._sessions() as session:
                row = TaskRow(task=task_text)
                session.add(row)
                session.commit()
                return Task.model_validate(row)
        except SQLAlchemyError as exc:
            self._fail("insert", exc)

    def list_all(self) -> List[Task]:
        try:
            with self._sessions() as session:
                rows = session.scalars(select(TaskRow).order_by(TaskRow.id)).all()
                return [Task.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            self._fail("list_all", exc)

    def get_by_id(self, task_id: int) -> Task:
        if not _storable_id(task_id):
            raise NotFound(task_id)
        try:
            with self._sessions() as session:
                row = session.get(TaskRow, task_id)
                if row is None:
                    raise NotFound(task_id)
                return Task.model_validate(row)
        except SQLAlchemyError as exc:
            self._fail("get_by_id", exc, task_id)

    def update_by_id(self, task_id: int, task_text: str) -> int:
        if not _storable_id(task_id):
            return 0
        stmt = (
            update(TaskRow)
            .where(TaskRow.id == task_id)
            .values(task=task_text)
            .execution_options(synchronize_session=False)
        )
        try:
            with self._sessions() as session:
                result = session.execute(stmt)
                session.commit()
                return result.rowcount
        except SQLAlchemyError as exc:
            self._fail("update_by_id", exc, task_id)

    def delete_by_id(self, task_id: int) -> int:
        if not _storable_id(task_id):
            return 0
        stmt = (
            delete(TaskRow)
            .where(TaskRow.id == task_id)
            .execution_options(synchronize_session=False)
        )
        try:
            with self._sessions() as session:
                result = session.execute(stmt)
                session.commit()
                return result.rowcount
        except SQLAlchemyError as exc:
            self._fail("delete_by_id", exc, task_id)

    def truncate(self) -> int:
        """Remove every task and reset the id counter, starting a fresh table lifetime."""
        try:
            with self._sessions() as session:
                result = session.execute(
                    delete(TaskRow).execution_options(synchronize_session=False)
                )
                removed = result.rowcount
                if self.engine.dialect.name == "sqlite":
                    session.execute(
                        text("DELETE FROM sqlite_sequence WHERE name = :name"),
                        {"name": TaskRow.__tablename__},
                    )
                session.commit()
                return removed
        except SQLAlchemyError as exc:
            self._fail("truncate", exc)
