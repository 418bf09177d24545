# src/togo/tasks/task_service.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from datetime import datetime

from ..core.ports import TaskRepo
from ..errors import ConflictError, NotFoundError, ValidationError
from .task_models import Task, now_local

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _clean_description(description: object) -> str:
    if not isinstance(description, str):
        raise ValidationError("description must be a string")
    text = description.strip()
    if not text:
        raise ValidationError("description must not be empty")
    return text


def _check_id(task_id: object) -> int:
    if not isinstance(task_id, int) or isinstance(task_id, bool):
        raise ValidationError(f"task ID must be an integer, got {task_id!r}")
    if task_id <= 0:
        raise ValidationError(f"task ID must be positive, got {task_id}")
    return task_id


class TaskService:
    """
    Task operations on top of an injected store.

    Works the same for the JSON file store and the SQLite store. When the
    store exposes a `lock`, every read-modify-write sequence runs under it.
    All failures are raised as TogoError subclasses; nothing here prints
    or exits.
    """

    def __init__(self, store: TaskRepo, *, clock: Clock | None = None) -> None:
        self._store = store
        self._clock: Clock = clock or now_local
        self._lock = getattr(store, "lock", None)

    @property
    def store(self) -> TaskRepo:
        return self._store

    def _guard(self) -> contextlib.AbstractContextManager:
        return self._lock if self._lock is not None else contextlib.nullcontext()

    def _get(self, task_id: int) -> Task:
        task = self._store.find_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    # ---- operations ----

    def create(self, description: str) -> Task:
        text = _clean_description(description)
        task = Task(id=None, description=text, created_at=self._clock())
        with self._guard():
            task = self._store.insert(task)
        logger.info("Task created id=%s", task.id)
        return task

    def list_tasks(self) -> list[Task]:
        """All tasks ordered by id; an empty list means there is nothing to show."""
        tasks = self._store.read_all()
        return sorted(tasks, key=lambda t: t.id or 0)

    def get(self, task_id: int) -> Task:
        return self._get(_check_id(task_id))

    def complete(self, task_id: int) -> Task:
        task_id = _check_id(task_id)
        with self._guard():
            task = self._get(task_id)
            if task.done:
                raise ConflictError(task_id, f"task {task_id} is already done")
            now = self._clock()
            task.done = True
            task.done_at = max(now, task.created_at)
            self._store.update(task)
        logger.info("Task completed id=%s", task_id)
        return task

    def edit(self, task_id: int, new_description: str) -> Task:
        text = _clean_description(new_description)
        task_id = _check_id(task_id)
        with self._guard():
            task = self._get(task_id)
            task.description = text
            self._store.update(task)
        logger.info("Task edited id=%s", task_id)
        return task

    def delete(self, task_id: int) -> None:
        task_id = _check_id(task_id)
        with self._guard():
            if not self._store.delete_by_id(task_id):
                raise NotFoundError(task_id)
        logger.info("Task deleted id=%s", task_id)

    def clear(self) -> int:
        """Remove every task; returns how many were removed (0 is fine)."""
        with self._guard():
            removed = self._store.delete_all()
        logger.info("Tasks cleared count=%s", removed)
        return removed
