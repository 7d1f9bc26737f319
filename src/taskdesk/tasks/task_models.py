# src/taskdesk/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - id is assigned by the store on insert; it stays None for tasks that
      only exist in memory (insert failed, or the session is memory-only).
    - created_at is whole seconds since the epoch (display only).
    """

    name: str
    is_finished: bool = False
    created_at: int = 0
    id: int | None = None
