"""
TODOSTER - Personal To-Do List
==============================

A small task list kept in one human-readable JSON file, with optional
repeating tasks that come back a number of days after completion.

Usage:
    from todoster import TodoManager, resolve_indices

    manager = TodoManager("todos.json")
    manager.add_task("Feed gecko", repeat_days=2)
    manager.complete_task(0)

    # Bulk operations take range expressions
    manager.delete_tasks(resolve_indices("1-4,7", len(manager.todo_list.items)))
"""

from .schema import TodoItem, TodoList
from .errors import TodoError, ParseError, IndexOutOfRange, CorruptStoreError
from .ranges import parse_index, parse_index_list, parse_index_ranges, expand_ranges, resolve_indices
from .config import Settings, default_file_path
from .manager import TodoManager

__version__ = "1.0.0"
__all__ = [
    "TodoManager",
    "TodoList",
    "TodoItem",
    "Settings",
    "default_file_path",
    "TodoError",
    "ParseError",
    "IndexOutOfRange",
    "CorruptStoreError",
    "parse_index",
    "parse_index_list",
    "parse_index_ranges",
    "expand_ranges",
    "resolve_indices",
]
