"""HTTP client for the remote task API."""

import datetime as dt
import logging
from types import TracebackType
from typing import Protocol

import httpx
import pydantic

from task_calendar.api.models import DEFAULT_POSITION, Task, TaskPayload
from task_calendar.errors import (
    CreationError,
    DeletionError,
    FetchError,
    NetworkError,
    ValidationError,
)

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch tasks"
CREATE_FAILED = "Failed to create task"
DELETE_FAILED = "Failed to delete task"


class TaskStore(Protocol):
    """Protocol for remote task storage."""

    async def list_tasks(self) -> list[Task]:
        """Fetch all tasks for the current user."""
        ...

    async def create_task(
        self, text: str, date: dt.date, position: int = DEFAULT_POSITION
    ) -> None:
        """Persist a new task."""
        ...

    async def delete_task(self, task_id: str) -> None:
        """Remove a task by ID."""
        ...


class TaskStoreClient:
    """Task store backed by the /api/tasks HTTP contract.

    No caching and no retries: every call is exactly one request.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with an API base URL or a preconfigured httpx client."""
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "TaskStoreClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def list_tasks(self) -> list[Task]:
        """Fetch all tasks, in server order.

        Raises:
            FetchError: If the request fails or the body is not a task list
        """
        try:
            response = await self._client.get("/api/tasks")
        except httpx.RequestError as e:
            logger.warning(f"[TaskStore] GET /api/tasks failed: {e}")
            raise FetchError(FETCH_FAILED) from e

        if not response.is_success:
            logger.warning(f"[TaskStore] GET /api/tasks returned {response.status_code}")
            raise FetchError(FETCH_FAILED)

        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise ValueError("Expected a JSON array")
            tasks = [TaskPayload.model_validate(item).to_task() for item in payload]
        except (ValueError, pydantic.ValidationError) as e:
            logger.warning(f"[TaskStore] Malformed task list: {e}")
            raise FetchError(FETCH_FAILED) from e

        logger.debug(f"[TaskStore] Fetched {len(tasks)} tasks")
        return tasks

    async def create_task(
        self, text: str, date: dt.date, position: int = DEFAULT_POSITION
    ) -> None:
        """Request persistence of a new task. The server assigns its ID.

        Raises:
            ValidationError: Server rejected the task with a message
            CreationError: Server rejected the task without a message
            NetworkError: Request never completed
        """
        body = {"text": text, "date": date.isoformat(), "position": position}
        try:
            response = await self._client.post("/api/task", json=body)
        except httpx.RequestError as e:
            logger.warning(f"[TaskStore] POST /api/task failed: {e}")
            raise NetworkError(CREATE_FAILED) from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"[TaskStore] POST /api/task returned {response.status_code}: {message}")
            if message:
                raise ValidationError(message)
            raise CreationError(CREATE_FAILED)

        logger.info(f"[TaskStore] Created task for {date.isoformat()}")

    async def delete_task(self, task_id: str) -> None:
        """Request removal of a task.

        Raises:
            ValidationError: Server refused with a message
            DeletionError: Server refused without a message
            NetworkError: Request never completed
        """
        path = f"/api/task/{task_id}"
        try:
            response = await self._client.delete(path)
        except httpx.RequestError as e:
            logger.warning(f"[TaskStore] DELETE {path} failed: {e}")
            raise NetworkError(DELETE_FAILED) from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"[TaskStore] DELETE {path} returned {response.status_code}: {message}")
            if message:
                raise ValidationError(message)
            raise DeletionError(DELETE_FAILED)

        logger.info(f"[TaskStore] Deleted task {task_id}")


def _error_message(response: httpx.Response) -> str | None:
    """Extract the {"error": "..."} message from a failed response, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str) and error.strip():
            return error
    return None
