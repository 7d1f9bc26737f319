# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task list manager depends on a Protocol instead of the concrete SQLite store.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    # Schema / load
    def ensure_schema(self) -> None: ...
    def select_active(self) -> list[Task]: ...
    def select_finished(self) -> list[Task]: ...

    # Writes
    def insert(self, task: Task) -> int: ...
    def update_finished_flags(self, flags: Iterable[tuple[int, bool]]) -> int: ...
    def delete_finished(self) -> int: ...
