"""
Task API routes.

Provides the CRUD endpoints over the task document:
- GET /api/tasks - List all tasks in insertion order
- POST /api/tasks - Create a task
- PUT /api/tasks/{task_id} - Update some or all fields of a task
- DELETE /api/tasks/{task_id} - Delete a task

Each mutating request performs exactly one write; a failed write is
reported as 500 and never retried.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from tasklist.core.tasks import (
    DeleteConfirmation,
    StorageWriteError,
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskRepository,
    TaskUpdate,
    TaskValidationError,
    validate_create,
    validate_update,
)

router = APIRouter()


def get_repository(request: Request) -> TaskRepository:
    """Return the repository the app was created with."""
    repository: TaskRepository = request.app.state.repository
    return repository


@router.get("/tasks", response_model=list[Task])
async def list_tasks(repository: TaskRepository = Depends(get_repository)) -> list[Task]:
    """
    List every task.

    Returns an empty list when the data file does not exist yet.

    Example response:
        [
          {"id": 1, "title": "Buy milk", "completed": false},
          {"id": 3, "title": "Call mom", "completed": true}
        ]
    """
    try:
        return repository.list_all()
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch tasks",
        ) from e


@router.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: Any = Body(default=None),
    repository: TaskRepository = Depends(get_repository),
) -> Task:
    """
    Create a task.

    Example request:
        POST /api/tasks
        {"title": "Buy milk", "completed": false}

    Raises:
        TaskValidationError: 400 listing every broken rule
        HTTPException: 500 if the data file cannot be written
    """
    violations = validate_create(payload)
    if violations:
        raise TaskValidationError(violations)
    body = TaskCreate.model_validate(payload)

    try:
        return repository.create(body.title, body.completed)
    except StorageWriteError as e:
        raise HTTPException(
            status_code=500,
            detail="Failed to create task",
        ) from e


@router.put("/tasks/{task_id}", response_model=Task)
async def update_task(
    task_id: int,
    payload: Any = Body(default=None),
    repository: TaskRepository = Depends(get_repository),
) -> Task:
    """
    Update a task.

    Only the fields present in the body are changed; an empty body is a
    no-op that still returns the task.

    Example request:
        PUT /api/tasks/1
        {"completed": true}

    Raises:
        TaskValidationError: 400 listing every broken rule
        HTTPException: 404 if no task has ``task_id``, 500 if the data
            file cannot be written
    """
    violations = validate_update(payload)
    if violations:
        raise TaskValidationError(violations)
    patch = TaskUpdate.model_validate(payload or {})

    try:
        return repository.update_by_id(task_id, patch)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail="Task not found") from e
    except StorageWriteError as e:
        raise HTTPException(
            status_code=500,
            detail="Failed to update task",
        ) from e


@router.delete("/tasks/{task_id}", response_model=DeleteConfirmation)
async def delete_task(
    task_id: int,
    repository: TaskRepository = Depends(get_repository),
) -> DeleteConfirmation:
    """
    Delete a task.

    The deleted id is never handed out again.

    Raises:
        HTTPException: 404 if no task has ``task_id``, 500 if the data
            file cannot be written
    """
    try:
        repository.delete_by_id(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail="Task not found") from e
    except StorageWriteError as e:
        raise HTTPException(
            status_code=500,
            detail="Failed to delete task",
        ) from e
    return DeleteConfirmation()
