"""Task list controller: in-memory authority for the tasks in a view."""

import datetime as dt
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

from task_calendar.api.models import Task, normalize_date
from task_calendar.client.task_store import TaskStore
from task_calendar.errors import TaskStoreError

if TYPE_CHECKING:
    from task_calendar.forms.add_task import AddTaskForm

logger = logging.getLogger(__name__)

Operation = Literal["refresh", "add", "remove"]
Listener = Callable[["TaskListController"], None]


class TaskState(str, Enum):
    """Per-task UI state derived from the controller."""

    IDLE = "idle"
    DELETING = "deleting"


@dataclass(frozen=True)
class OperationError:
    """The single active error, tagged with the operation that produced it."""

    operation: Operation
    message: str


class TaskListController:
    """Holds the task collection and is the only component that mutates the store.

    The collection is only ever replaced wholesale by refresh(). Store errors are
    caught here and turned into a single user-visible message.
    """

    def __init__(self, store: TaskStore) -> None:
        """Initialize with an empty collection."""
        self._store = store
        self.tasks: list[Task] = []
        self.submitting = False
        self.deleting_id: str | None = None
        self.error: OperationError | None = None
        self._listeners: list[Listener] = []

    @property
    def error_message(self) -> str:
        """Active error message, or an empty string."""
        return self.error.message if self.error else ""

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _fail(self, operation: Operation, message: str) -> None:
        self.error = OperationError(operation, message)
        logger.warning(f"[TaskList] {operation} failed: {message}")

    def task_state(self, task_id: str) -> TaskState:
        """UI state of a single task."""
        return TaskState.DELETING if self.deleting_id == task_id else TaskState.IDLE

    def tasks_on(self, day: dt.date) -> list[Task]:
        """Tasks whose date falls on the given calendar day, in collection order."""
        target = normalize_date(day)
        return [task for task in self.tasks if task.date == target]

    async def refresh(self) -> bool:
        """Replace the collection with a fresh full fetch.

        On failure the previous collection is kept.
        """
        try:
            tasks = await self._store.list_tasks()
        except TaskStoreError as e:
            self._fail("refresh", e.message)
            self._notify()
            return False

        self.tasks = tasks
        logger.debug(f"[TaskList] Refreshed {len(tasks)} tasks")
        self._notify()
        return True

    async def add_task(self, form: "AddTaskForm") -> bool:
        """Create a task from form input, then refresh.

        Missing text or an invalid date never reaches the store. On failure the
        form keeps its input so the user can resubmit.
        """
        text = (form.text or "").strip()
        if not text:
            self._fail("add", "Task description is required")
            self._notify()
            return False
        if form.date is None or form.date == "":
            self._fail("add", "Due date is required")
            self._notify()
            return False
        try:
            due = normalize_date(form.date)
        except ValueError:
            self._fail("add", "Due date is not a valid date")
            self._notify()
            return False

        self.error = None
        form.form_error = ""
        self.submitting = True
        self._notify()
        try:
            await self._store.create_task(text, due, form.position)
        except TaskStoreError as e:
            self._fail("add", e.message)
            form.form_error = e.message
            return False
        finally:
            self.submitting = False
            self._notify()

        logger.info(f"[TaskList] Added task for {due.isoformat()}")
        form.reset()
        await self.refresh()
        return True

    async def remove_task(self, task_id: str) -> bool:
        """Delete a task by ID, then refresh.

        deleting_id is set for the duration of the call and always cleared
        afterwards. Starting a second delete replaces the first indicator.
        """
        self.deleting_id = task_id
        self._notify()
        try:
            await self._store.delete_task(task_id)
        except TaskStoreError as e:
            self._fail("remove", e.message)
            return False
        finally:
            self.deleting_id = None
            self._notify()

        logger.info(f"[TaskList] Removed task {task_id}")
        await self.refresh()
        return True
