"""
TODOSTER - Task Manager
=======================
Handles persistence, task operations and the text reports.

One TodoManager serves one command: the file is loaded (and due repeating
tasks reset) on first use, a single operation runs, and mutating operations
save the whole list back. Every operation validates before it mutates, so a
failed command leaves both the in-memory list and the file untouched.

The file is not locked. Two invocations saving at the same time race and
the last writer wins.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from .errors import CorruptStoreError, ParseError
from .ranges import check_indices
from .schema import MAX_REPEAT_DAYS, TodoItem, TodoList

logger = logging.getLogger("todoster")

Clock = Callable[[], datetime]
IndexedItem = Tuple[int, TodoItem]


def local_now() -> datetime:
    return datetime.now().astimezone()


class TodoManager:
    """
    Task store backed by a single JSON file

    Key features:
    - Missing file means an empty list (first run), nothing is created
    - Corrupt file is reported, never overwritten
    - Atomic save via temp file + rename
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        clock: Optional[Clock] = None
    ):
        self.file_path = Path(file_path)
        self.clock: Clock = clock or local_now
        self._current_todo_list: Optional[TodoList] = None

    @property
    def todo_list(self) -> TodoList:
        if self._current_todo_list is None:
            self.load()
        return self._current_todo_list

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def load(self) -> TodoList:
        """Load the task list from file and reset due repeating tasks"""
        todo_list = self._read()

        reset = todo_list.auto_reset_repeating(self.clock())
        if reset:
            logger.info(f"🔁 Reset {reset} repeating task(s)")

        self._current_todo_list = todo_list
        return todo_list

    def _read(self) -> TodoList:
        if not self.file_path.exists():
            logger.debug(f"No task file at {self.file_path}, starting empty")
            return TodoList()

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptStoreError(self.file_path, str(e)) from e

        try:
            todo_list = TodoList.model_validate(data)
        except ValidationError as e:
            raise CorruptStoreError(self.file_path, _summarize(e)) from e

        logger.info(
            f"📂 Loaded {len(todo_list.items)} task(s), {todo_list.incomplete_count} open, "
            f"from {self.file_path}"
        )
        return todo_list

    def save(self, todo_list: Optional[TodoList] = None) -> None:
        """Write the task list to file atomically"""
        if todo_list is None:
            todo_list = self.todo_list

        payload = json.dumps(todo_list.model_dump(mode='json'), indent=2, ensure_ascii=False)

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.file_path.parent),
            prefix=f".{self.file_path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload + "\n")
            os.replace(tmp_name, self.file_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info(f"✅ Saved {len(todo_list.items)} task(s) to {self.file_path}")

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def list_tasks(self) -> List[IndexedItem]:
        """All tasks with their current indices (read-only)"""
        return list(enumerate(self.todo_list.items))

    def add_task(self, text: str, repeat_days: Optional[int] = None) -> TodoItem:
        """Append a new incomplete task"""
        _check_repeat(repeat_days)

        item = TodoItem(text=text, repeat_days=repeat_days)
        self.todo_list.items.append(item)
        self.save()

        logger.debug(f"➕ Added task [{len(self.todo_list.items) - 1}] {text!r}")
        return item

    def complete_task(self, index: int) -> TodoItem:
        """Mark one task complete as of now"""
        return self.complete_tasks([index])[0][1]

    def complete_tasks(self, indices: Iterable[int]) -> List[IndexedItem]:
        """Mark several tasks complete; all indices are checked first"""
        wanted = set(indices)
        check_indices(wanted, len(self.todo_list.items))

        now = self.clock()
        completed = []
        for index in sorted(wanted):
            item = self.todo_list.items[index]
            item.mark_complete(now)
            completed.append((index, item))

        self.save()
        logger.debug(f"✔️ Completed task(s): {sorted(wanted)}")
        return completed

    def undo_task(self, index: int) -> TodoItem:
        """Mark a task incomplete again, whatever its state"""
        item = self._get_task(index)
        item.mark_incomplete()
        self.save()
        return item

    def edit_task(
        self,
        index: int,
        text: Optional[str] = None,
        repeat_days: Optional[int] = None,
        clear_repeat: bool = False
    ) -> TodoItem:
        """
        Change text and/or repeat interval.

        clear_repeat wins when repeat_days is also given. Fields whose
        argument is None are left alone.
        """
        item = self._get_task(index)
        if not clear_repeat:
            _check_repeat(repeat_days)

        if text is not None:
            item.text = text

        if clear_repeat:
            item.repeat_days = None
        elif repeat_days is not None:
            item.repeat_days = repeat_days

        self.save()
        return item

    def preview_delete(self, indices: Iterable[int]) -> List[IndexedItem]:
        """Tasks a delete would remove, in removal order; nothing is changed"""
        wanted = set(indices)
        check_indices(wanted, len(self.todo_list.items))
        return [(index, self.todo_list.items[index]) for index in sorted(wanted, reverse=True)]

    def delete_tasks(self, indices: Iterable[int]) -> List[IndexedItem]:
        """
        Remove tasks by index.

        The whole set is validated before anything is removed, then removal
        runs from the highest index down so pending positions stay valid.
        """
        doomed = self.preview_delete(indices)

        removed = []
        for index, _ in doomed:
            removed.append((index, self.todo_list.items.pop(index)))

        self.save()
        logger.debug(f"🗑️ Deleted task(s): {[index for index, _ in removed]}")
        return removed

    # ========================================
    # HELPER METHODS
    # ========================================

    def _get_task(self, index: int) -> TodoItem:
        """Get task by index"""
        check_indices({index}, len(self.todo_list.items))
        return self.todo_list.items[index]

    # ========================================
    # REPORTING
    # ========================================

    def get_list_report(self) -> str:
        """Incomplete tasks first, then complete tasks with repeat info"""
        now = self.clock()
        incomplete = [(i, t) for i, t in self.list_tasks() if not t.complete]
        complete = [(i, t) for i, t in self.list_tasks() if t.complete]

        lines = ["=== Incomplete tasks ==="]
        if not incomplete:
            lines.append("(none)")
        for index, item in incomplete:
            line = f"[{index}] {item.text}"
            if item.repeat_days is not None:
                line += f" (Repeat: {item.repeat_days}d)"
            lines.append(line)

        lines.extend(["", "=== Complete tasks ==="])
        if not complete:
            lines.append("(none)")
        for index, item in complete:
            lines.append(f"[{index}] {item.text} {describe_repeat(item, now)}")

        return "\n".join(lines)

    def get_json_report(self) -> str:
        return json.dumps(self.todo_list.model_dump(mode='json'), indent=2, ensure_ascii=False)


def describe_repeat(item: TodoItem, now: datetime) -> str:
    """Repeat status shown next to a complete task"""
    diff = item.time_until_next_repeat(now)
    if diff is None:
        if item.repeat_days is not None:
            return "(repeat: no completion date yet)"
        return "(no repeat)"

    if diff <= timedelta(0):
        overdue_days = (-diff).days
        if overdue_days <= 0:
            return "(repeat: due today)"
        return f"(repeat: overdue by {overdue_days}d)"

    days = diff.days
    if days < 1:
        return "(repeat: due today)"
    hours = diff.seconds // 3600
    return f"(repeat in {days}d, {hours}hrs)"


def _check_repeat(repeat_days: Optional[int]) -> None:
    if repeat_days is not None and not 0 < repeat_days <= MAX_REPEAT_DAYS:
        raise ParseError(
            f"Repeat interval must be between 1 and {MAX_REPEAT_DAYS} days, got {repeat_days}",
            token=str(repeat_days)
        )


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"
