"""Port interface for task persistence (repository boundary)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from taskapi.app.schemas import Task


@runtime_checkable
class ITaskRepository(Protocol):
    """Task repository abstraction for insert/list/get/update/delete operations."""

    def insert(self, task_text: str) -> Task:
        """Persist a new task and return it with its store-assigned id."""

    def list_all(self) -> list[Task]:
        """Return every task ordered by ascending id."""

    def get_by_id(self, task_id: int) -> Task:
        """Return the task with the given id or raise NotFound."""

    def update_by_id(self, task_id: int, task_text: str) -> int:
        """Replace the task text and return the affected-row count (0 or 1)."""

    def delete_by_id(self, task_id: int) -> int:
        """Remove the task and return the affected-row count (0 or 1)."""
