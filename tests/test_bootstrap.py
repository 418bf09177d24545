# tests/test_bootstrap.py

from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from togo.cli.bootstrap import apply_time_locale, create_store
from togo.errors import TogoError
from togo.tasks.json_store import JsonTaskStore
from togo.tasks.task_store import SqliteTaskStore


def test_missing_environment_locale_is_not_a_warning(monkeypatch, caplog) -> None:
    monkeypatch.delenv("LC_ALL", raising=False)
    monkeypatch.delenv("LC_TIME", raising=False)
    monkeypatch.setenv("LANG", "xx_XX.UTF-8")

    with caplog.at_level(logging.DEBUG, logger="togo"):
        apply_time_locale(None)

    assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []
    assert "xx_XX.UTF-8" in caplog.text
    assert "None" not in caplog.text


def test_configured_unknown_locale_warns(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="togo"):
        apply_time_locale("xx_XX")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "xx_XX" in warnings[0].getMessage()


@pytest.mark.parametrize(
    ("backend", "cls"), [("json", JsonTaskStore), ("sqlite", SqliteTaskStore)]
)
def test_create_store_picks_backend(settings, backend: str, cls: type) -> None:
    assert isinstance(create_store(replace(settings, storage=backend)), cls)


def test_create_store_rejects_unknown_backend(settings) -> None:
    with pytest.raises(TogoError):
        create_store(replace(settings, storage="redis"))
