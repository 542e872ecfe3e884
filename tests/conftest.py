# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from todoster.manager import TodoManager

from .helpers import NOW, item, write_items


@pytest.fixture()
def task_file(tmp_path: Path) -> Path:
    return tmp_path / "config" / "todoster" / "todos.json"


@pytest.fixture()
def manager(task_file: Path) -> TodoManager:
    """Manager with a frozen clock so dates are deterministic."""
    return TodoManager(task_file, clock=lambda: NOW)


@pytest.fixture()
def abcd_file(task_file: Path) -> Path:
    write_items(task_file, [item("a"), item("b"), item("c"), item("d")])
    return task_file
