# tests/conftest.py

from __future__ import annotations

import locale
from pathlib import Path

import pytest

from togo.config import Settings
from togo.tasks.json_store import JsonTaskStore
from togo.tasks.task_service import TaskService
from togo.tasks.task_store import SqliteTaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every path into the per-test tmp dir."""
    return Settings(
        app_name="togo",
        log_level="WARNING",
        log_to_file=False,
        storage="json",
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.json",
        tasks_db_path=tmp_path / "tasks.db",
        time_locale="C",
    )


@pytest.fixture(autouse=True)
def c_time_locale():
    """Keep month abbreviations in English regardless of the host locale."""
    saved = locale.setlocale(locale.LC_TIME)
    locale.setlocale(locale.LC_TIME, "C")
    yield
    locale.setlocale(locale.LC_TIME, saved)


@pytest.fixture(params=["json", "sqlite"])
def store(request, tmp_path: Path):
    """
    Both storage adapters, so service tests run against each of them.

    Real files are used on purpose: persistence is what we want to test.
    """
    if request.param == "json":
        return JsonTaskStore(tmp_path / "tasks.json")
    return SqliteTaskStore(tmp_path / "tasks.db")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def service(store, clock: FakeClock) -> TaskService:
    return TaskService(store, clock=clock)
