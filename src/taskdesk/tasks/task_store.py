# src/taskdesk/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from .task_errors import QueryError, SchemaError, StoreUnavailable, WriteError
from .task_models import Task

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = frozenset({"id", "name", "finished", "added_at"})

# Failures that mean "cannot use this file at all" rather than "bad schema".
_UNAVAILABLE_CODES = ("SQLITE_READONLY", "SQLITE_CANTOPEN", "SQLITE_PERM", "SQLITE_BUSY", "SQLITE_LOCKED")
_UNAVAILABLE_MESSAGES = ("readonly database", "unable to open", "database is locked")


def is_unavailable_error(e: sqlite3.Error) -> bool:
    code = getattr(e, "sqlite_errorname", None) or ""
    if code.startswith(_UNAVAILABLE_CODES):
        return True
    msg = str(e).lower()
    return any(m in msg for m in _UNAVAILABLE_MESSAGES)


class TaskStore:
    """
    SQLite task store.

    One table, no migrations:
    - create table if missing
    - use PRAGMA table_info to detect an incompatible (older) table and refuse it

    Connections:
    - each method opens its own SQLite connection and closes it before returning
    - the constructor does no I/O; call ensure_schema() first
    """

    def __init__(self, db_path: str | Path = "todo_list.db") -> None:
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"cannot open {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            name=str(row["name"] or ""),
            is_finished=bool(row["finished"]),
            created_at=int(row["added_at"] or 0),
        )

    def _select(self, finished: bool) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT id, name, finished, added_at FROM tasks WHERE finished = ? ORDER BY id ASC",
                (int(finished),),
            )
            return [self._row_to_task(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise QueryError(f"select finished={int(finished)} failed: {e}") from e
        finally:
            conn.close()

    def _write(self, sql: str, params: tuple = ()) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount
        except sqlite3.Error as e:
            conn.rollback()
            raise WriteError(f"write failed: {e}") from e
        finally:
            conn.close()

    # ---- public API ----

    def ensure_schema(self) -> None:
        """
        Create the tasks table if it does not exist yet.

        Safe to call any number of times. An existing table is never altered;
        if it lacks a required column, SchemaError is raised.
        """
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailable(f"cannot create directory for {self._db_path}: {e}") from e

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    finished INTEGER NOT NULL DEFAULT 0,
                    added_at INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            conn.commit()

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}
        except sqlite3.Error as e:
            if is_unavailable_error(e):
                raise StoreUnavailable(f"cannot use {self._db_path}: {e}") from e
            raise SchemaError(f"cannot create tasks table in {self._db_path}: {e}") from e
        finally:
            conn.close()

        missing = REQUIRED_COLUMNS - cols
        if missing:
            raise SchemaError(
                f"tasks table in {self._db_path} is missing columns: {', '.join(sorted(missing))}"
            )
        logger.debug("TaskStore schema ok db=%s", self._db_path)

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        except sqlite3.Error as e:
            raise QueryError(f"count failed: {e}") from e
        finally:
            conn.close()

    def insert(self, task: Task) -> int:
        """Append one row with the task's current fields and return its id."""
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "INSERT INTO tasks(name, finished, added_at) VALUES (?, ?, ?)",
                (task.name, int(task.is_finished), int(task.created_at)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise WriteError(f"insert failed name={task.name!r}: {e}") from e
        finally:
            conn.close()

        rowid = cur.lastrowid
        if rowid is None:
            raise WriteError("SQLite did not return lastrowid for tasks insert")
        logger.debug("Task inserted id=%s name=%r", rowid, task.name)
        return int(rowid)

    def select_active(self) -> list[Task]:
        return self._select(False)

    def select_finished(self) -> list[Task]:
        return self._select(True)

    def update_finished_flag(self, name: str, finished: bool) -> int:
        """
        Set the flag on every row named `name`.

        Names are not unique: duplicates are all updated. Returns the number of
        rows affected (0 is fine).
        """
        n = self._write(
            "UPDATE tasks SET finished = ? WHERE name = ?",
            (int(finished), name),
        )
        logger.debug("Flag by name=%r finished=%s rows=%s", name, finished, n)
        return n

    def update_finished_flag_by_id(self, task_id: int, finished: bool) -> int:
        return self._write(
            "UPDATE tasks SET finished = ? WHERE id = ?",
            (int(finished), int(task_id)),
        )

    def update_finished_flags(self, flags: Iterable[tuple[int, bool]]) -> int:
        """
        Flush many (id, finished) pairs in a single transaction.

        Either every update is applied or, on failure, none is.
        """
        pairs = [(int(finished), int(task_id)) for task_id, finished in flags]
        if not pairs:
            return 0

        conn = self._get_conn()
        try:
            total = 0
            for params in pairs:
                cur = conn.execute("UPDATE tasks SET finished = ? WHERE id = ?", params)
                total += cur.rowcount
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise WriteError(f"flag flush failed ({len(pairs)} rows), rolled back: {e}") from e
        finally:
            conn.close()

        logger.debug("Flushed flags rows=%s matched=%s", len(pairs), total)
        return total

    def delete_finished(self) -> int:
        """Remove every finished row. Idempotent."""
        n = self._write("DELETE FROM tasks WHERE finished = 1")
        logger.debug("Deleted finished rows=%s", n)
        return n
