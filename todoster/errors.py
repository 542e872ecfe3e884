"""
TODOSTER - Errors
=================
Everything the CLI reports to the user derives from TodoError.
OS-level failures are left as OSError and surfaced verbatim.
"""

from pathlib import Path
from typing import Optional


class TodoError(Exception):
    """Base class for todoster errors"""


class ParseError(TodoError, ValueError):
    """Malformed index, range expression or command argument"""

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


class IndexOutOfRange(TodoError, IndexError):
    """A referenced task index does not exist"""

    def __init__(self, index: int, length: int):
        if length:
            message = f"No task with index {index} (valid: 0-{length - 1})"
        else:
            message = f"No task with index {index} (the list is empty)"
        super().__init__(message)
        self.index = index
        self.length = length


class CorruptStoreError(TodoError):
    """Backing file exists but cannot be deserialized"""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot read task file {path}: {reason}")
        self.path = path
        self.reason = reason
