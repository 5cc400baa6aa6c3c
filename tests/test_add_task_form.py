"""Tests for AddTaskForm."""

import datetime as dt

import pytest

from task_calendar.forms.add_task import (
    DATE_IN_PAST,
    DATE_INVALID,
    DATE_REQUIRED,
    TEXT_REQUIRED,
    AddTaskForm,
)


def test_validate_requires_text_and_date(today) -> None:
    """Test empty inputs report both field errors."""
    form = AddTaskForm()

    assert form.validate(today) is False
    assert form.field_errors == {"text": TEXT_REQUIRED, "date": DATE_REQUIRED}


def test_validate_rejects_past_and_invalid_dates(today) -> None:
    """Test dates before today or unparseable dates are rejected."""
    yesterday = AddTaskForm(text="x", date=today - dt.timedelta(days=1))
    garbage = AddTaskForm(text="x", date="not-a-date")

    assert yesterday.validate(today) is False
    assert yesterday.field_errors == {"date": DATE_IN_PAST}
    assert garbage.validate(today) is False
    assert garbage.field_errors == {"date": DATE_INVALID}


def test_validate_accepts_today_from_input_string(today) -> None:
    """Test today's date as an HTML date input value is valid."""
    form = AddTaskForm(text="Pay rent", date=today.isoformat())

    assert form.validate(today) is True
    assert form.field_errors == {}
    assert AddTaskForm.min_date(today) == today


@pytest.mark.asyncio
async def test_submit_invalid_never_calls_store(controller, fake_store, today) -> None:
    """Test blank text is caught locally without a network round trip."""
    form = AddTaskForm(text="", date=today)

    assert await form.submit(controller, today) is False

    assert fake_store.calls == []
    assert form.field_errors["text"] == TEXT_REQUIRED


@pytest.mark.asyncio
async def test_submit_ignored_while_submitting(controller, fake_store, today) -> None:
    """Test submission is disabled while another submission is in flight."""
    controller.submitting = True
    form = AddTaskForm(text="x", date=today)

    assert await form.submit(controller, today) is False

    assert fake_store.calls == []
    assert form.text == "x"


@pytest.mark.asyncio
async def test_submit_success_resets_form(controller, fake_store, today) -> None:
    """Test a successful submission empties the inputs."""
    form = AddTaskForm(text="New", date=today)

    assert await form.submit(controller, today) is True

    assert (form.text, form.date) == ("", None)
    assert fake_store.count("create") == 1


def test_for_day_keeps_date_on_reset(today) -> None:
    """Test a day-scoped form keeps its date after reset."""
    form = AddTaskForm.for_day(today)
    form.text = "x"
    form.form_error = "boom"

    form.reset()

    assert form.text == ""
    assert form.date == today
    assert form.form_error == ""
