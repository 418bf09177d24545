# src/togo/errors.py

"""Typed failures returned to the command dispatcher.

The service and storage layers never print or exit; they raise one of these
and the dispatcher decides how to render it and which exit status to use.
"""

from __future__ import annotations


class TogoError(Exception):
    """Base error for every expected failure of a togo operation."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TogoError):
    """Malformed or empty input supplied by the caller."""


class UsageError(ValidationError):
    """Wrong argument count/type detected by the dispatcher."""

    exit_code = 2


class NotFoundError(TogoError):
    """Referenced task id does not exist in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task with ID {task_id} not found")
        self.task_id = task_id


class ConflictError(TogoError):
    """Operation is not valid for the task's current state."""

    def __init__(self, task_id: int, message: str) -> None:
        super().__init__(message)
        self.task_id = task_id


class StorageError(TogoError):
    """Underlying file or database failure (I/O, corrupt content, migration)."""
