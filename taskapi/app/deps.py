"""Dependency providers wiring request handlers to the storage handle."""

from __future__ import annotations

from fastapi import Request

from taskapi.app.adapters.repo_sql import SQLAlchemyTaskRepository
from taskapi.ports.task_repository import ITaskRepository


def get_task_repository(request: Request) -> ITaskRepository:
    """Return a repository bound to the engine created in the app lifespan."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("storage handle not initialised; app lifespan has not run")
    return SQLAlchemyTaskRepository(engine)
