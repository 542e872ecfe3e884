"""
TODOSTER - Task Schema Definition
=================================
Data model for the task file plus the repeat-reset rules.

A task is addressed by its position in TodoList.items. Positions are only
meaningful within one invocation: deleting index 2 shifts every later task
down by one.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, List, Union
from pydantic import BaseModel, Field

MAX_REPEAT_DAYS = 36500  # One century


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class TodoItem(BaseModel):
    """Single to-do entry"""
    text: str                                   # Free-form description
    complete: bool = False
    complete_date: Optional[datetime] = None    # Set on completion
    repeat_days: Optional[int] = Field(default=None, gt=0, le=MAX_REPEAT_DAYS)  # Auto-reset interval

    def mark_complete(self, now: datetime) -> None:
        self.complete = True
        self.complete_date = now

    def mark_incomplete(self) -> None:
        self.complete = False
        self.complete_date = None

    # ========================================
    # REPEAT ENGINE
    # ========================================

    def next_due_date(self) -> Optional[date]:
        """Day the task comes back, based on the completion date (not time of day)"""
        if self.complete_date is None or self.repeat_days is None:
            return None
        try:
            return self.complete_date.date() + timedelta(days=self.repeat_days)
        except OverflowError:
            # Completed close to year 9999; never comes back
            return date.max

    def should_reset(self, today: Union[date, datetime]) -> bool:
        """True once the due day has been reached (inclusive)"""
        if not self.complete:
            return False
        due = self.next_due_date()
        if due is None:
            return False
        return _as_date(today) >= due

    def reset_if_due(self, today: Union[date, datetime]) -> bool:
        """Reset a due repeating task to incomplete; repeat_days is kept"""
        if not self.should_reset(today):
            return False
        self.mark_incomplete()
        return True

    def time_until_next_repeat(self, now: datetime) -> Optional[timedelta]:
        """
        Time left until midnight at the start of the due day.

        Negative once the due day has started. None for incomplete or
        non-repeating tasks, or when no completion date is recorded.
        """
        if not self.complete:
            return None
        due = self.next_due_date()
        if due is None:
            return None
        due_start = datetime.combine(due, time.min, tzinfo=now.tzinfo)
        return due_start - now


class TodoList(BaseModel):
    """Complete task file contents"""
    items: List[TodoItem] = Field(default_factory=list)

    def auto_reset_repeating(self, today: Union[date, datetime]) -> int:
        """Run the repeat-reset pass over every task, return how many were reset"""
        return sum(1 for item in self.items if item.reset_if_due(today))

    @property
    def incomplete_count(self) -> int:
        return sum(1 for item in self.items if not item.complete)
