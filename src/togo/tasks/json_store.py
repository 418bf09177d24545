# src/togo/tasks/json_store.py

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ..errors import ConflictError, NotFoundError, StorageError
from .task_models import Task, task_from_json, task_to_json

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """
    Flat-file task store: the whole collection is one JSON array.

    Every mutation reads the array, changes it in memory and rewrites the
    file in full (temp file + os.replace, so readers never see a half-written
    file). A missing or zero-byte file is an empty collection.

    Thread-safety:
    - `lock` (re-entrant) guards every public method; the service also holds
      it across its own find -> update sequences.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self.lock = threading.RLock()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create data directory {self._path.parent}: {e}") from e
        logger.debug("JsonTaskStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        """Compatibility hook for shutdown (nothing is kept open)."""
        return

    # ---- low-level helpers ----

    def _load(self) -> list[Task]:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"error reading tasks file {self._path}: {e}") from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"tasks file {self._path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"tasks file {self._path} must contain a JSON array")

        return [task_from_json(item) for item in data]

    def _save(self, tasks: Sequence[Task]) -> None:
        payload = json.dumps([task_to_json(t) for t in tasks], ensure_ascii=False, indent=2)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageError(f"error saving tasks file {self._path}: {e}") from e
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

    # ---- public API ----

    def read_all(self) -> list[Task]:
        with self.lock:
            return self._load()

    def write_all(self, tasks: Sequence[Task]) -> None:
        with self.lock:
            self._save(list(tasks))

    def count_tasks(self) -> int:
        with self.lock:
            return len(self._load())

    def insert(self, task: Task) -> Task:
        with self.lock:
            tasks = self._load()
            if task.id is None:
                stored = replace(task, id=max((t.id or 0 for t in tasks), default=0) + 1)
            elif any(t.id == task.id for t in tasks):
                raise ConflictError(task.id, f"task with ID {task.id} already exists")
            else:
                stored = replace(task)
            tasks.append(stored)
            self._save(tasks)
            logger.debug("Task inserted id=%s", stored.id)
            return stored

    def find_by_id(self, task_id: int) -> Task | None:
        with self.lock:
            for t in self._load():
                if t.id == task_id:
                    return t
            return None

    def update(self, task: Task) -> None:
        if task.id is None:
            raise StorageError("cannot update a task without an id")
        with self.lock:
            tasks = self._load()
            for i, t in enumerate(tasks):
                if t.id == task.id:
                    if t.done and t.done_at != task.done_at:
                        raise ConflictError(task.id, f"task {task.id} is already done")
                    tasks[i] = task
                    self._save(tasks)
                    return
            raise NotFoundError(task.id)

    def delete_by_id(self, task_id: int) -> bool:
        with self.lock:
            tasks = self._load()
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                return False
            # An emptied collection is persisted as [] rather than removing the file.
            self._save(remaining)
            return True

    def delete_all(self) -> int:
        """Empty the collection; returns how many tasks were removed."""
        with self.lock:
            removed = len(self._load())
            self._save([])
            return removed
