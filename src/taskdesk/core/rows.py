# src/taskdesk/core/rows.py

"""Turn manager state into renderable rows (numbered, 1-based)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ..tasks.task_list import TaskListManager
from ..tasks.task_models import Task


@dataclass(frozen=True, slots=True)
class TaskRow:
    number: int
    name: str
    checked: bool
    added: str


def _added_label(ts: int) -> str:
    if ts <= 0:
        return ""
    return datetime.fromtimestamp(ts).astimezone().strftime("%Y-%m-%d %H:%M")


def build_rows(tasks: Iterable[Task]) -> list[TaskRow]:
    return [
        TaskRow(number=i, name=t.name, checked=t.is_finished, added=_added_label(t.created_at))
        for i, t in enumerate(tasks, start=1)
    ]


def active_rows(manager: TaskListManager) -> list[TaskRow]:
    return build_rows(manager.active_tasks)


def finished_rows(manager: TaskListManager) -> list[TaskRow]:
    return build_rows(manager.finished_tasks)


def format_row(row: TaskRow, *, checkbox: bool = True) -> str:
    box = ("[x] " if row.checked else "[ ] ") if checkbox else ""
    added = f"  ({row.added})" if row.added else ""
    return f"{box}{row.number}. {row.name}{added}"
