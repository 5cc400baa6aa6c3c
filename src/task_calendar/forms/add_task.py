"""Add-task form: collects and validates text and due date."""

import datetime as dt
import logging
from typing import TYPE_CHECKING

from task_calendar.api.models import DEFAULT_POSITION, normalize_date

if TYPE_CHECKING:
    from task_calendar.controller.task_list import TaskListController

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Task description is required"
DATE_REQUIRED = "Due date is required"
DATE_INVALID = "Due date is not a valid date"
DATE_IN_PAST = "Due date cannot be in the past"


class AddTaskForm:
    """Form state for creating a task.

    A form created with for_day() (as embedded in a day cell) keeps its day
    across resets.
    """

    def __init__(
        self,
        text: str = "",
        date: dt.date | str | None = None,
        position: int = DEFAULT_POSITION,
    ) -> None:
        """Initialize form inputs."""
        self._preset_date: dt.date | None = None
        self.text = text
        self.date: dt.date | str | None = date
        self.position = position
        self.field_errors: dict[str, str] = {}
        self.form_error = ""

    @classmethod
    def for_day(cls, day: dt.date) -> "AddTaskForm":
        """Form scoped to one calendar day."""
        form = cls(date=day)
        form._preset_date = day
        return form

    @staticmethod
    def min_date(today: dt.date | None = None) -> dt.date:
        """Earliest selectable due date."""
        return today or dt.date.today()

    def validate(self, today: dt.date | None = None) -> bool:
        """Check inputs locally and record per-field messages.

        Args:
            today: Reference day for the not-in-the-past rule (defaults to today)

        Returns:
            True if both fields are valid
        """
        errors: dict[str, str] = {}

        if not self.text.strip():
            errors["text"] = TEXT_REQUIRED

        if self.date is None or self.date == "":
            errors["date"] = DATE_REQUIRED
        else:
            try:
                due = normalize_date(self.date)
            except ValueError:
                errors["date"] = DATE_INVALID
            else:
                if due < self.min_date(today):
                    errors["date"] = DATE_IN_PAST

        self.field_errors = errors
        return not errors

    async def submit(
        self, controller: "TaskListController", today: dt.date | None = None
    ) -> bool:
        """Validate and hand the form to the controller.

        Does nothing while the controller is already submitting. Invalid input
        never triggers a network call.

        Returns:
            True if the task was created
        """
        if controller.submitting:
            logger.debug("[AddTaskForm] Submission ignored while submitting")
            return False
        if not self.validate(today):
            return False
        return await controller.add_task(self)

    def reset(self) -> None:
        """Empty the inputs and clear all messages."""
        self.text = ""
        self.date = self._preset_date
        self.field_errors = {}
        self.form_error = ""
