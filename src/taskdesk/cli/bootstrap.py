# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the SQLite task store into the task list manager,
- loads tasks and records whether the session is memory-only.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_errors import TaskStoreError
from ..tasks.task_list import TaskListManager
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_db_path)
    manager = TaskListManager(store)
    _active, _finished, ok = manager.initialize()

    if ok:
        try:
            total = store.count_tasks()
        except TaskStoreError:
            total = -1
        logger.info("Task store ready db=%s total=%s", store.db_path, total)
    else:
        logger.warning("Task store unavailable db=%s, tasks will not be saved.", store.db_path)

    return AppState(
        settings=settings,
        tasks=manager,
        show_finished=bool(getattr(settings, "show_finished", False)),
        store_warning=not ok,
    )
