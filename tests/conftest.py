"""Test fixtures for TaskCalendar."""

import datetime as dt
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_calendar.api.models import Task
from task_calendar.client.task_store import TaskStoreClient
from task_calendar.controller.task_list import TaskListController
from task_calendar.errors import TaskStoreError
from task_calendar.factory import create_app
from task_calendar.storage.task_repository import TaskRepository

TODAY = dt.date(2026, 10, 19)


class FakeTaskStore:
    """In-memory task store that records calls.

    Set *_error to make the next calls fail. Set observe to capture state
    while a mutating call is in flight.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.calls: list[tuple[Any, ...]] = []
        self.list_error: TaskStoreError | None = None
        self.create_error: TaskStoreError | None = None
        self.delete_error: TaskStoreError | None = None
        self.observe: Callable[[], Any] | None = None
        self.observed: list[Any] = []
        self._next_id = 100

    async def list_tasks(self) -> list[Task]:
        self.calls.append(("list",))
        if self.list_error:
            raise self.list_error
        return list(self.tasks)

    async def create_task(self, text: str, date: dt.date, position: int = 1) -> None:
        self.calls.append(("create", text, date, position))
        if self.observe:
            self.observed.append(self.observe())
        if self.create_error:
            raise self.create_error
        self._next_id += 1
        self.tasks.append(Task(id=str(self._next_id), text=text, date=date, position=position))

    async def delete_task(self, task_id: str) -> None:
        self.calls.append(("delete", task_id))
        if self.observe:
            self.observed.append(self.observe())
        if self.delete_error:
            raise self.delete_error
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Two tasks on TODAY and one on the next day."""
    return [
        Task(id="1", text="Write report", date=TODAY, position=2),
        Task(id="2", text="Call dentist", date=TODAY, position=1),
        Task(id="3", text="Water plants", date=TODAY + dt.timedelta(days=1), position=1),
    ]


@pytest.fixture
def fake_store(sample_tasks: list[Task]) -> FakeTaskStore:
    """Fake store preloaded with sample tasks."""
    return FakeTaskStore(sample_tasks)


@pytest.fixture
def controller(fake_store: FakeTaskStore) -> TaskListController:
    """Controller backed by the fake store (not yet refreshed)."""
    return TaskListController(fake_store)


@pytest.fixture
def repository() -> TaskRepository:
    """In-memory repository for the reference API."""
    return TaskRepository()


@pytest.fixture
def app(repository: TaskRepository, monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    """Reference API app with the test repository injected."""
    monkeypatch.setattr("task_calendar.factory._repository", repository)
    return create_app()


@pytest.fixture
def test_client(app: FastAPI) -> TestClient:
    """Create test client for the reference API."""
    return TestClient(app)


@pytest.fixture
def asgi_store(app: FastAPI) -> TaskStoreClient:
    """Task store client talking to the reference API in-process."""
    transport = httpx.ASGITransport(app=app)
    return TaskStoreClient(client=httpx.AsyncClient(transport=transport, base_url="http://testserver"))


def mock_store(handler: Callable[[httpx.Request], httpx.Response]) -> TaskStoreClient:
    """Task store client whose requests are answered by handler."""
    transport = httpx.MockTransport(handler)
    return TaskStoreClient(client=httpx.AsyncClient(transport=transport, base_url="http://testserver"))


@pytest.fixture
def make_mock_store() -> Callable[[Callable[[httpx.Request], httpx.Response]], TaskStoreClient]:
    """Factory fixture for MockTransport-backed clients."""
    return mock_store


@pytest.fixture
def today() -> dt.date:
    """Fixed reference day matching sample_tasks."""
    return TODAY
