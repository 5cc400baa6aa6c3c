"""Task repository for the reference API, optionally persisted as YAML."""

import datetime as dt
import logging
import uuid
from pathlib import Path

import yaml

from task_calendar.api.models import DEFAULT_POSITION, Task, normalize_date

logger = logging.getLogger(__name__)


class TaskRepository:
    """Tasks in insertion order, written to a YAML file after each change."""

    def __init__(self, data_file: str | None = None) -> None:
        """Initialize empty repository.

        Args:
            data_file: YAML file to load from and save to. None keeps tasks in memory.
        """
        self._path = Path(data_file) if data_file else None
        self._tasks: dict[str, Task] = {}

    def load(self) -> None:
        """Load tasks from the data file, replacing current contents."""
        if self._path is None or not self._path.exists():
            return

        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8")) or []
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self._path}") from e

        if not isinstance(data, list):
            raise ValueError(f"Invalid task data in {self._path}")

        tasks: dict[str, Task] = {}
        try:
            for item in data:
                task = Task(
                    id=str(item["id"]),
                    text=str(item["text"]),
                    date=normalize_date(item["date"]),
                    position=int(item.get("position", DEFAULT_POSITION)),
                )
                tasks[task.id] = task
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid task data in {self._path}") from e
        self._tasks = tasks
        logger.info(f"[Repository] Loaded {len(tasks)} tasks from {self._path}")

    def _save(self) -> None:
        if self._path is None:
            return
        data = [
            {"id": t.id, "text": t.text, "date": t.date.isoformat(), "position": t.position}
            for t in self._tasks.values()
        ]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8"
        )

    def list(self) -> list[Task]:
        """All tasks in insertion order."""
        return list(self._tasks.values())

    def create(
        self,
        text: str | None,
        date: dt.date | str | None,
        position: int = DEFAULT_POSITION,
    ) -> Task:
        """Validate and store a new task with a fresh ID.

        Raises:
            ValueError: If text is blank or date is missing or invalid
        """
        if not text or not text.strip():
            raise ValueError("Task text is required")
        if date is None or date == "":
            raise ValueError("Task date is required")
        try:
            due = normalize_date(date)
        except (ValueError, TypeError) as e:
            raise ValueError("Task date is invalid") from e

        task = Task(id=uuid.uuid4().hex, text=text.strip(), date=due, position=position)
        self._tasks[task.id] = task
        self._save()
        logger.info(f"[Repository] Created task {task.id} for {due.isoformat()}")
        return task

    def delete(self, task_id: str) -> None:
        """Remove a task.

        Raises:
            KeyError: If no task has this ID
        """
        if task_id not in self._tasks:
            raise KeyError(task_id)
        del self._tasks[task_id]
        self._save()
        logger.info(f"[Repository] Deleted task {task_id}")
