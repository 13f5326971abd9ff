from typing import Optional


class StoreError(Exception):
    """Raised when a task store operation fails."""

    def __init__(
        self,
        message: str,
        *,
        operation: str = "-",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.cause = cause


class StoreUnavailable(StoreError):
    """Connection pool exhausted, connection lost, or database locked."""


class NotFound(StoreError):
    """No task row matched the requested id."""

    def __init__(self, task_id: int, *, operation: str = "get_by_id"):
        super().__init__(f"task not found: {task_id}", operation=operation)
        self.task_id = task_id


class StoreBootstrapError(StoreError):
    """The database could not be opened or the schema could not be applied."""
