# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.core.state import AppState
from taskdesk.tasks.task_list import TaskListManager
from taskdesk.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdesk-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "todo_list.db",
        show_finished=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    s = TaskStore(settings.tasks_db_path)
    s.ensure_schema()
    return s


@pytest.fixture()
def manager(store: TaskStore, clock: FakeClock) -> TaskListManager:
    m = TaskListManager(store, clock=clock)
    _active, _finished, ok = m.initialize()
    assert ok
    return m


@pytest.fixture()
def state(settings: SimpleNamespace, manager: TaskListManager) -> AppState:
    """
    AppState wired to a real SQLite store in tmp_path.

    NOTE: the store is real on purpose; its correctness is part of what we test.
    """
    return AppState(settings=settings, tasks=manager)
