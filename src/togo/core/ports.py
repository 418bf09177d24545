# src/togo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task service.

The service depends on this Protocol instead of a concrete store, so the JSON
file store and the SQLite store are interchangeable and tests can inject
their own instances.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Durable task collection.

    "Not found" is a normal outcome (None / False); I/O and corrupt content
    raise StorageError. Stores that need an in-process mutex for their
    read-modify-write cycle expose it as a `lock` attribute.
    """

    def read_all(self) -> list[Task]: ...
    def write_all(self, tasks: Sequence[Task]) -> None: ...
    def insert(self, task: Task) -> Task: ...
    def find_by_id(self, task_id: int) -> Task | None: ...
    def update(self, task: Task) -> None: ...
    def delete_by_id(self, task_id: int) -> bool: ...
    def delete_all(self) -> int: ...
    def count_tasks(self) -> int: ...
    def close(self) -> None: ...
