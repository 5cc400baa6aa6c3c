"""Day cell: the tasks due on one date, with inline text editing."""

import datetime as dt
import logging
from dataclasses import replace
from enum import Enum

from task_calendar.api.models import Task, normalize_date
from task_calendar.controller.task_list import TaskListController
from task_calendar.forms.add_task import AddTaskForm

logger = logging.getLogger(__name__)

ACTIVATION_KEYS = frozenset({"Enter", " "})
CONFIRM_KEY = "Enter"


class EditState(str, Enum):
    """Inline edit state of one task inside one day cell."""

    VIEWING = "viewing"
    EDITING = "editing"


class DayCell:
    """Projection of the controller's tasks onto a single calendar day.

    Edited text stays local to this cell. There is no update endpoint, so an
    edit is shown here only and never reaches the task store.
    """

    def __init__(
        self,
        date: dt.date,
        controller: TaskListController,
        index: int = 0,
        today: dt.date | None = None,
    ) -> None:
        """Initialize cell and subscribe to controller changes."""
        self.date = normalize_date(date)
        self.index = index
        self.is_today = self.date == (normalize_date(today) if today else dt.date.today())
        self.add_form = AddTaskForm.for_day(self.date)
        self.focused_id: str | None = None
        self._controller = controller
        self._editing: set[str] = set()
        self._local_text: dict[str, str] = {}
        self.tasks: list[Task] = []
        self._unsubscribe = controller.subscribe(self._on_change)
        self._project()

    @property
    def day_number(self) -> str:
        """Zero-padded day of month."""
        return f"{self.date.day:02d}"

    @property
    def day_name(self) -> str:
        """Weekday name, e.g. "Monday"."""
        return self.date.strftime("%A")

    def close(self) -> None:
        """Stop following controller changes."""
        self._unsubscribe()

    def _on_change(self, controller: TaskListController) -> None:
        self._project()

    def _project(self) -> None:
        tasks = sorted(self._controller.tasks_on(self.date), key=lambda t: t.position)
        ids = {task.id for task in tasks}

        # Drop local state for tasks that are gone
        self._editing &= ids
        self._local_text = {k: v for k, v in self._local_text.items() if k in ids}
        if self.focused_id not in ids:
            self.focused_id = None

        self.tasks = [
            replace(task, text=self._local_text[task.id]) if task.id in self._local_text else task
            for task in tasks
        ]

    def _get(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(f"Task {task_id} is not shown on {self.date.isoformat()}")

    def edit_state(self, task_id: str) -> EditState:
        """Current edit state of a task in this cell."""
        return EditState.EDITING if task_id in self._editing else EditState.VIEWING

    def checkbox_id(self, task_id: str) -> str:
        """DOM-style ID of the (presentational) completion checkbox."""
        return f"task-{self.index}-{task_id}"

    def activate(self, task_id: str) -> None:
        """Enter editing mode and focus the input."""
        self._get(task_id)
        self._editing.add(task_id)
        self.focused_id = task_id

    def commit(self, task_id: str, new_text: str) -> None:
        """Leave editing mode, replacing the shown text with the edited value."""
        task = self._get(task_id)
        self._editing.discard(task_id)
        if self.focused_id == task_id:
            self.focused_id = None
        if new_text != task.text:
            self._local_text[task_id] = new_text
            logger.debug(f"[DayCell] Edited task {task_id} locally")
        self._project()

    def blur(self, task_id: str, value: str) -> None:
        """Input lost focus."""
        if self.edit_state(task_id) is EditState.EDITING:
            self.commit(task_id, value)

    def handle_key(self, task_id: str, key: str, value: str | None = None) -> None:
        """Keyboard handling for a task's text or input.

        Viewing: Enter or space activates editing.
        Editing: Enter confirms the current input value.
        """
        if self.edit_state(task_id) is EditState.VIEWING:
            if key in ACTIVATION_KEYS:
                self.activate(task_id)
        elif key == CONFIRM_KEY:
            self.commit(task_id, value if value is not None else self._get(task_id).text)

    async def submit_new_task(self, today: dt.date | None = None) -> bool:
        """Create a task on this day through the controller."""
        return await self.add_form.submit(self._controller, today)
