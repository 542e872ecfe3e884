# tests/test_schema.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from todoster.manager import describe_repeat
from todoster.schema import MAX_REPEAT_DAYS, TodoItem, TodoList

from .helpers import NOW

D = datetime(2026, 10, 10, 18, 45, tzinfo=timezone.utc)


def completed(repeat_days: int | None, when: datetime = D) -> TodoItem:
    task = TodoItem(text="Feed gecko", repeat_days=repeat_days)
    task.mark_complete(when)
    return task


def test_new_item_defaults() -> None:
    task = TodoItem(text="")
    assert task.complete is False
    assert task.complete_date is None
    assert task.repeat_days is None


def test_repeat_resets_on_due_day_and_is_idempotent() -> None:
    task = completed(2)

    assert task.reset_if_due(date(2026, 10, 12)) is True
    assert task.complete is False
    assert task.complete_date is None
    assert task.repeat_days == 2

    assert task.reset_if_due(date(2026, 10, 13)) is False
    assert task.complete is False
    assert task.repeat_days == 2


def test_repeat_not_due_the_day_before() -> None:
    task = completed(2)
    assert task.should_reset(date(2026, 10, 11)) is False
    assert task.reset_if_due(datetime(2026, 10, 11, 23, 59, tzinfo=timezone.utc)) is False
    assert task.complete is True


def test_due_day_ignores_time_of_completion() -> None:
    task = completed(1, when=datetime(2026, 10, 10, 23, 59, tzinfo=timezone.utc))
    assert task.should_reset(datetime(2026, 10, 11, 0, 1, tzinfo=timezone.utc)) is True


def test_non_repeating_and_incomplete_tasks_untouched() -> None:
    one_off = completed(None)
    assert one_off.reset_if_due(D + timedelta(days=30)) is False
    assert one_off.complete is True
    assert one_off.complete_date == D

    pending = TodoItem(text="later", repeat_days=1)
    assert pending.reset_if_due(D + timedelta(days=30)) is False
    assert pending.complete is False


def test_complete_repeating_task_without_date_is_not_reset() -> None:
    task = TodoItem(text="odd", complete=True, repeat_days=1)
    assert task.reset_if_due(D + timedelta(days=30)) is False
    assert task.complete is True


def test_auto_reset_pass_counts_resets() -> None:
    todo_list = TodoList(items=[completed(2), completed(None), completed(30), TodoItem(text="x")])
    assert todo_list.auto_reset_repeating(date(2026, 10, 12)) == 1
    assert [t.complete for t in todo_list.items] == [False, True, True, False]
    assert todo_list.auto_reset_repeating(date(2026, 10, 12)) == 0
    assert todo_list.incomplete_count == 2


def test_repeat_days_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        TodoItem(text="bad", repeat_days=0)
    with pytest.raises(ValidationError):
        TodoItem(text="bad", repeat_days=-3)


def test_time_until_next_repeat_counts_to_midnight() -> None:
    task = completed(2, when=NOW)
    assert task.time_until_next_repeat(NOW) == timedelta(days=1, hours=14, minutes=30)
    assert describe_repeat(task, NOW) == "(repeat in 1d, 14hrs)"


def test_repeat_descriptions() -> None:
    assert describe_repeat(completed(None), NOW) == "(no repeat)"
    assert describe_repeat(TodoItem(text="x", complete=True, repeat_days=3), NOW) == (
        "(repeat: no completion date yet)"
    )
    assert describe_repeat(completed(7, when=NOW - timedelta(days=7)), NOW) == "(repeat: due today)"
    assert describe_repeat(completed(1, when=NOW - timedelta(days=4)), NOW) == "(repeat: overdue by 3d)"


def test_incomplete_task_has_no_next_repeat() -> None:
    assert TodoItem(text="x", repeat_days=2).time_until_next_repeat(NOW) is None


def test_repeat_days_has_an_upper_bound() -> None:
    assert TodoItem(text="yearly-ish", repeat_days=MAX_REPEAT_DAYS).repeat_days == MAX_REPEAT_DAYS
    with pytest.raises(ValidationError):
        TodoItem(text="bad", repeat_days=MAX_REPEAT_DAYS + 1)
    with pytest.raises(ValidationError):
        TodoItem(text="bad", repeat_days=3000000)


def test_due_date_past_the_calendar_never_resets() -> None:
    task = completed(MAX_REPEAT_DAYS, when=datetime(9990, 1, 1, tzinfo=timezone.utc))
    assert task.next_due_date() == date.max
    assert task.reset_if_due(date(9999, 12, 31)) is False
    assert task.complete is True


def test_due_within_a_day_reads_due_today() -> None:
    assert describe_repeat(completed(1, when=NOW), NOW) == "(repeat: due today)"
