"""Task API endpoints."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from task_calendar.api.models import CreateTaskRequest, Task, TaskResponse
from task_calendar.factory import get_repository

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Failure body understood by the client: {"error": message}."""
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/tasks", response_model=list[TaskResponse])
async def list_tasks() -> list[TaskResponse]:
    """List all tasks in insertion order."""
    repository = get_repository()
    return [_task_to_response(task) for task in repository.list()]


@router.post("/task", response_model=TaskResponse, status_code=201)
async def create_task(request: CreateTaskRequest) -> TaskResponse | JSONResponse:
    """Create a task. The server assigns the ID.

    Returns:
        The stored task, or 400 {"error": ...} if text or date is missing or invalid
    """
    repository = get_repository()
    try:
        task = repository.create(request.text, request.date, request.position)
    except ValueError as e:
        logger.info(f"Rejected task: {e}")
        return error_response(400, str(e))
    return _task_to_response(task)


@router.delete("/task/{task_id}", response_model=None)
async def delete_task(task_id: str) -> dict[str, str] | JSONResponse:
    """Delete a task by ID.

    Returns:
        Success message, or 404 {"error": ...} if the task does not exist
    """
    repository = get_repository()
    try:
        repository.delete(task_id)
    except KeyError:
        return error_response(404, "Task not found")
    return {"status": "success", "id": task_id}


def _task_to_response(task: Task) -> TaskResponse:
    """Convert Task to TaskResponse."""
    return TaskResponse(id=task.id, text=task.text, date=task.date, position=task.position)
