# src/taskdesk/tasks/task_list.py

"""
Task list manager.

Owns the two in-memory lists (active / finished) and keeps them consistent
with the task store at a few well-defined points:

- initialize():             full load of both lists
- add():                    append in memory, then insert (best-effort)
- toggle():                 memory only, flushed later
- delete_selected():        flush all flags (one transaction), drop finished
                            tasks from the active list, reload finished list
- clear_finished_history(): clear memory, then delete finished rows

Store failures never escape: they are logged and turned into a boolean or a
degraded (memory-only) session.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..core.ports import TaskRepo
from .task_errors import TaskStoreError
from .task_models import Task

logger = logging.getLogger(__name__)

TaskSnapshot = tuple[Task, ...]


class TaskListManager:
    def __init__(self, repo: TaskRepo | None, *, clock: Callable[[], float] = time.time) -> None:
        self._repo = repo
        self._clock = clock
        self._active: list[Task] = []
        self._finished: list[Task] = []
        self._persistent = False

    # ---- read-only views ----

    @property
    def active_tasks(self) -> TaskSnapshot:
        return tuple(self._active)

    @property
    def finished_tasks(self) -> TaskSnapshot:
        return tuple(self._finished)

    @property
    def persistent(self) -> bool:
        """False when the store could not be initialised (memory-only session)."""
        return self._persistent

    def _store(self) -> TaskRepo | None:
        return self._repo if self._persistent else None

    # ---- operations ----

    def initialize(self) -> tuple[TaskSnapshot, TaskSnapshot, bool]:
        """
        Create the schema and load both lists from storage.

        Returns (active, finished, ok). ok=False means the session is memory-only.
        """
        self._active = []
        self._finished = []
        self._persistent = False

        if self._repo is None:
            logger.warning("No task store configured, session is memory-only.")
            return self.active_tasks, self.finished_tasks, False

        try:
            self._repo.ensure_schema()
            active = self._repo.select_active()
            finished = self._repo.select_finished()
        except TaskStoreError:
            logger.exception("Task store unavailable, session is memory-only.")
            return self.active_tasks, self.finished_tasks, False

        self._active = list(active)
        self._finished = list(finished)
        self._persistent = True
        logger.info("Tasks loaded active=%d finished=%d", len(self._active), len(self._finished))
        return self.active_tasks, self.finished_tasks, True

    def add(self, name: str) -> bool:
        """
        Append a new active task, then persist it.

        Empty or whitespace-only names are ignored. Returns True only if the row
        was written; otherwise the task still stays in memory for this session.
        """
        text = (name or "").strip()
        if not text:
            return False

        task = Task(name=text, is_finished=False, created_at=int(self._clock()))
        self._active.append(task)

        store = self._store()
        if store is None:
            logger.debug("Memory-only: task %r not persisted.", text)
            return False

        try:
            task.id = store.insert(task)
        except TaskStoreError:
            logger.exception("Failed to persist task %r, kept in memory only.", text)
            return False
        return True

    def toggle(self, index: int) -> bool:
        """Flip the done flag of the active task at `index`. Returns the new flag."""
        if not 0 <= index < len(self._active):
            raise IndexError(f"active task index out of range: {index} (size {len(self._active)})")
        task = self._active[index]
        task.is_finished = not task.is_finished
        return task.is_finished

    def delete_selected(self) -> tuple[TaskSnapshot, TaskSnapshot]:
        """
        Move every flagged task out of the active list.

        All active flags are flushed in one transaction first. If that fails the
        lists are left as they are, so memory and storage stay in step.
        """
        store = self._store()

        if store is not None:
            flags = [(t.id, t.is_finished) for t in self._active if t.id is not None]
            try:
                store.update_finished_flags(flags)
            except TaskStoreError:
                logger.exception("Flag flush failed, active list left unchanged.")
                return self.active_tasks, self.finished_tasks

        done = [t for t in self._active if t.is_finished]
        self._active = [t for t in self._active if not t.is_finished]

        # Tasks without an id never reached storage; keep them visible in memory.
        unsaved = [t for t in done if t.id is None]

        if store is None:
            self._finished.extend(done)
        else:
            try:
                self._finished = store.select_finished() + unsaved
            except TaskStoreError:
                logger.exception("Finished list reload failed, merging in memory.")
                self._finished.extend(done)

        logger.info(
            "Deleted selected moved=%d active=%d finished=%d",
            len(done),
            len(self._active),
            len(self._finished),
        )
        return self.active_tasks, self.finished_tasks

    def clear_finished_history(self) -> bool:
        """
        Forget every finished task, in memory and in storage.

        Memory is cleared first and not restored if the delete fails.
        """
        self._finished = []

        store = self._store()
        if store is None:
            return True

        try:
            n = store.delete_finished()
        except TaskStoreError:
            logger.exception("Failed to delete finished tasks from storage.")
            return False

        logger.info("Cleared finished history rows=%d", n)
        return True
