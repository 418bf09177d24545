# src/togo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- applies the LC_TIME locale used for month names,
- picks the storage adapter (JSON file or SQLite) from settings,
- injects it into the TaskService and returns the AppState.
"""

from __future__ import annotations

import locale
import logging
import os

from ..config import STORAGE_BACKENDS, Settings, get_settings
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..errors import TogoError
from ..tasks.json_store import JsonTaskStore
from ..tasks.task_service import TaskService
from ..tasks.task_store import SqliteTaskStore

logger = logging.getLogger(__name__)


def apply_time_locale(name: str | None) -> None:
    """Use `name` (or the environment's locale when None) for LC_TIME; best-effort."""
    try:
        locale.setlocale(locale.LC_TIME, name or "")
    except locale.Error:
        if name:
            logger.warning("Unsupported time locale %r; month names stay in the C locale.", name)
            return
        # Same lookup order setlocale uses for "".
        resolved = next(
            (os.environ[k] for k in ("LC_ALL", "LC_TIME", "LANG") if os.environ.get(k)), "C"
        )
        logger.debug("Environment locale %r is not installed; month names stay in the C locale.", resolved)


def create_store(settings: Settings) -> TaskRepo:
    backend = settings.storage
    if backend == "json":
        return JsonTaskStore(settings.tasks_file)
    if backend == "sqlite":
        return SqliteTaskStore(settings.tasks_db_path)
    raise TogoError(
        f"unknown storage backend {backend!r}; set TOGO_STORAGE to one of: "
        + ", ".join(STORAGE_BACKENDS)
    )


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    apply_time_locale(settings.time_locale)

    store = create_store(settings)
    logger.debug("Storage backend=%s", settings.storage)
    return AppState(settings=settings, store=store, tasks=TaskService(store))
