# src/togo/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator, Sequence
from dataclasses import replace
from pathlib import Path

from ..errors import ConflictError, NotFoundError, StorageError
from .task_models import Task, check_task, format_timestamp, now_local, parse_timestamp

logger = logging.getLogger(__name__)


class SqliteTaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Deletes are soft: rows get deleted_at and disappear from every query.
    AUTOINCREMENT keeps ids strictly increasing, so a deleted id is never reused.

    Thread-safety:
    - each method opens its own SQLite connection; SQLite does the locking
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path).expanduser()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create data directory {self._db_path.parent}: {e}") from e
        self._ensure_schema()
        logger.debug("SqliteTaskStore ready db=%s", self._db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection; commit on success, roll back and wrap sqlite errors."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"failed to open database {self._db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise StorageError(f"database error: {e}") from e
        except BaseException:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS tasks (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        description TEXT NOT NULL,
                        done INTEGER NOT NULL DEFAULT 0,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL,
                        done_at TEXT,
                        deleted_at TEXT
                    )
                    """
                )

                cur.execute("PRAGMA table_info(tasks)")
                cols = {row["name"] for row in cur.fetchall()}

                def add_col(name: str, decl: str) -> None:
                    if name in cols:
                        return
                    cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                    logger.info("SqliteTaskStore migration: added column %s", name)

                add_col("description", "TEXT NOT NULL DEFAULT ''")
                add_col("done", "INTEGER NOT NULL DEFAULT 0")
                add_col("created_at", "TEXT NOT NULL DEFAULT ''")
                add_col("updated_at", "TEXT NOT NULL DEFAULT ''")
                add_col("done_at", "TEXT")
                add_col("deleted_at", "TEXT")

                cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_deleted_at ON tasks(deleted_at)")
        except StorageError as e:
            raise StorageError(f"failed to migrate database {self._db_path}: {e.message}") from e

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        try:
            task = Task(
                id=int(row["id"]),
                description=str(row["description"] or ""),
                created_at=parse_timestamp(row["created_at"]),
                done=bool(row["done"]),
                done_at=parse_timestamp(row["done_at"]) if row["done_at"] is not None else None,
            )
        except ValueError as e:
            raise StorageError(f"task {row['id']} has invalid timestamps") from e
        return check_task(task)

    @staticmethod
    def _done_at_str(task: Task) -> str | None:
        return format_timestamp(task.done_at) if task.done_at is not None else None

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks WHERE deleted_at IS NULL").fetchone()
            return int(n)

    def read_all(self) -> list[Task]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE deleted_at IS NULL ORDER BY id ASC"
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def write_all(self, tasks: Sequence[Task]) -> None:
        """Replace every live row with `tasks` in a single transaction."""
        now = format_timestamp(now_local())
        with self._connect() as conn:
            conn.execute(
                "UPDATE tasks SET deleted_at = ? WHERE deleted_at IS NULL", (now,)
            )
            for t in tasks:
                if t.id is None:
                    cur = conn.execute(
                        """
                        INSERT INTO tasks(description, done, created_at, updated_at, done_at)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (t.description, int(t.done), format_timestamp(t.created_at), now,
                         self._done_at_str(t)),
                    )
                    t.id = int(cur.lastrowid or 0)
                    continue
                conn.execute(
                    """
                    INSERT OR REPLACE INTO tasks(
                        id, description, done, created_at, updated_at, done_at, deleted_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, NULL)
                    """,
                    (int(t.id), t.description, int(t.done), format_timestamp(t.created_at), now,
                     self._done_at_str(t)),
                )

    def insert(self, task: Task) -> Task:
        now = format_timestamp(now_local())
        with self._connect() as conn:
            if task.id is None:
                cur = conn.execute(
                    """
                    INSERT INTO tasks(description, done, created_at, updated_at, done_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (task.description, int(task.done), format_timestamp(task.created_at), now,
                     self._done_at_str(task)),
                )
            else:
                try:
                    cur = conn.execute(
                        """
                        INSERT INTO tasks(id, description, done, created_at, updated_at, done_at)
                        VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        (int(task.id), task.description, int(task.done),
                         format_timestamp(task.created_at), now, self._done_at_str(task)),
                    )
                except sqlite3.IntegrityError as e:
                    raise ConflictError(task.id, f"task with ID {task.id} already exists") from e
            rowid = cur.lastrowid
        if rowid is None:
            raise StorageError("SQLite did not return lastrowid for task insert")
        stored = replace(task, id=int(rowid))
        logger.debug("Task inserted id=%s", stored.id)
        return stored

    def find_by_id(self, task_id: int) -> Task | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM tasks WHERE id = ? AND deleted_at IS NULL", (int(task_id),)
            ).fetchone()
        return self._row_to_task(row) if row else None

    def update(self, task: Task) -> None:
        """
        Persist `task` by id.

        A row that is already done only accepts writes carrying the same done_at,
        so a concurrent second completion (or a stale pending copy) cannot
        overwrite the first one: it raises ConflictError instead.
        """
        if task.id is None:
            raise StorageError("cannot update a task without an id")
        done_at = self._done_at_str(task)
        with self._connect() as conn:
            cur = conn.execute(
                """
                UPDATE tasks
                SET description = ?,
                    done = ?,
                    done_at = ?,
                    updated_at = ?
                WHERE id = ?
                  AND deleted_at IS NULL
                  AND (done = 0 OR done_at IS ?)
                """,
                (task.description, int(task.done), done_at,
                 format_timestamp(now_local()), int(task.id), done_at),
            )
            if cur.rowcount == 1:
                return
            exists = conn.execute(
                "SELECT 1 FROM tasks WHERE id = ? AND deleted_at IS NULL", (int(task.id),)
            ).fetchone()
        if exists is None:
            raise NotFoundError(task.id)
        raise ConflictError(task.id, f"task {task.id} is already done")

    def delete_by_id(self, task_id: int) -> bool:
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE tasks SET deleted_at = ? WHERE id = ? AND deleted_at IS NULL",
                (format_timestamp(now_local()), int(task_id)),
            )
            return cur.rowcount == 1

    def delete_all(self) -> int:
        """Soft-delete every live row; returns how many were removed."""
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE tasks SET deleted_at = ? WHERE deleted_at IS NULL",
                (format_timestamp(now_local()),),
            )
            removed = cur.rowcount
        logger.debug("Soft-deleted %d tasks", removed)
        return removed
