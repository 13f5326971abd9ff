"""Task CRUD API router."""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from taskapi.app.auth import optional_api_key
from taskapi.app.core.errors import NotFound, StoreError
from taskapi.app.core.logging_config import store_event
from taskapi.app.deps import get_task_repository
from taskapi.app.schemas import Message, NewTask, Task, UpdateTask

logger = logging.getLogger(__name__)

router = APIRouter(tags=["task"])

TaskId = Annotated[int, Path(description="Task database id")]

TASK_DELETED = {"msg": "Task Deleted"}
TASK_NOT_FOUND = {"msg": "task not found"}


@router.get(
    "/tasks",
    response_model=List[Task],
    responses={500: {"description": "Store error; body is an empty list"}},
)
def all_tasks(repo=Depends(get_task_repository)):
    """List all Tasks in the database, ordered by id."""

    try:
        tasks = repo.list_all()
    except StoreError:
        return JSONResponse(status_code=500, content=[])
    return JSONResponse(status_code=200, content=[t.model_dump() for t in tasks])


@router.post(
    "/tasks",
    response_model=Task,
    status_code=201,
    responses={500: {"model": Task, "description": "Store error; id is 0"}},
)
def new_task(payload: NewTask, repo=Depends(get_task_repository)):
    """Create a new Task; the store assigns its id."""

    try:
        task = repo.insert(payload.task)
    except StoreError:
        return JSONResponse(status_code=500, content={"id": 0, "task": payload.task})
    logger.info("created task", extra=store_event("insert", task.id))
    return JSONResponse(
        status_code=201,
        content=task.model_dump(),
        headers={"Location": f"/tasks/{task.id}"},
    )


@router.get(
    "/tasks/{task_id:int}",
    response_model=Task,
    responses={404: {"model": Task, "description": "Task not found"}},
)
def task(task_id: TaskId, repo=Depends(get_task_repository)):
    """Return the Task with the given id, or 404 if it does not exist."""

    try:
        found = repo.get_by_id(task_id)
    except NotFound:
        logger.warning("task not found", extra=store_event("get_by_id", task_id))
        return JSONResponse(status_code=404, content={"id": task_id, "task": ""})
    except StoreError:
        return JSONResponse(status_code=404, content={"id": task_id, "task": ""})
    return JSONResponse(status_code=200, content=found.model_dump())


@router.put(
    "/tasks/{task_id:int}",
    response_model=UpdateTask,
    responses={404: {"model": UpdateTask, "description": "Task was not found"}},
)
def update_task(
    task_id: TaskId,
    payload: UpdateTask,
    repo=Depends(get_task_repository),
    _api_key=Depends(optional_api_key),
):
    """Replace the description of the Task with the given id."""

    body = payload.model_dump()
    try:
        affected = repo.update_by_id(task_id, payload.task)
    except StoreError:
        return JSONResponse(status_code=404, content=body)
    if affected != 1:
        logger.warning("task not found", extra=store_event("update_by_id", task_id))
        return JSONResponse(status_code=404, content=body)
    return JSONResponse(status_code=200, content=body)


@router.delete(
    "/tasks/{task_id:int}",
    response_model=Message,
    responses={404: {"model": Message, "description": "Task was not found"}},
)
def delete_task(task_id: TaskId, repo=Depends(get_task_repository)):
    """Delete the Task with the given id."""

    try:
        affected = repo.delete_by_id(task_id)
    except StoreError:
        return JSONResponse(status_code=404, content=TASK_NOT_FOUND)
    if affected != 1:
        logger.warning("task not found", extra=store_event("delete_by_id", task_id))
        return JSONResponse(status_code=404, content=TASK_NOT_FOUND)
    return JSONResponse(status_code=200, content=TASK_DELETED)
