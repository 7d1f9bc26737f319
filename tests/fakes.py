# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from taskdesk.tasks.task_errors import QueryError, StoreUnavailable, WriteError
from taskdesk.tasks.task_models import Task


class FakeClock:
    """Deterministic clock: starts at a fixed epoch second and ticks on each call."""

    def __init__(self, start: float = 1_700_000_000.0, step: float = 1.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


class FakeTaskRepo:
    """
    In-memory TaskRepo with switchable failures.

    This avoids SQLite and makes tests purely about the manager's recovery
    rules: what stays in memory when a given store call fails.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.rows: dict[int, Task] = {}
        self.next_id = 1
        for t in tasks or []:
            self._put(t)

        self.fail_schema = False
        self.fail_insert = False
        self.fail_flush = False
        self.fail_select = False
        self.fail_delete = False

        self.inserts = 0
        self.flushes: list[list[tuple[int, bool]]] = []

    def _put(self, task: Task) -> int:
        tid = self.next_id
        self.next_id += 1
        self.rows[tid] = replace(task, id=tid)
        return tid

    def ensure_schema(self) -> None:
        if self.fail_schema:
            raise StoreUnavailable("fake: cannot open")

    def select_active(self) -> list[Task]:
        if self.fail_select:
            raise QueryError("fake: select failed")
        return [replace(t) for t in self.rows.values() if not t.is_finished]

    def select_finished(self) -> list[Task]:
        if self.fail_select:
            raise QueryError("fake: select failed")
        return [replace(t) for t in self.rows.values() if t.is_finished]

    def insert(self, task: Task) -> int:
        self.inserts += 1
        if self.fail_insert:
            raise WriteError("fake: insert failed")
        return self._put(task)

    def update_finished_flags(self, flags: Iterable[tuple[int, bool]]) -> int:
        pairs = list(flags)
        if self.fail_flush:
            raise WriteError("fake: flush failed")
        self.flushes.append(pairs)
        for tid, finished in pairs:
            if tid in self.rows:
                self.rows[tid] = replace(self.rows[tid], is_finished=finished)
        return len(pairs)

    def delete_finished(self) -> int:
        if self.fail_delete:
            raise WriteError("fake: delete failed")
        gone = [tid for tid, t in self.rows.items() if t.is_finished]
        for tid in gone:
            del self.rows[tid]
        return len(gone)
