# src/taskdesk/tasks/task_errors.py

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for task storage failures. Never fatal to the process."""


class StoreUnavailable(TaskStoreError):
    """The database file (or its directory) cannot be opened or created."""


class SchemaError(TaskStoreError):
    """Table creation failed or the existing table has an incompatible shape."""


class QueryError(TaskStoreError):
    """A SELECT could not be prepared or stepped."""


class WriteError(TaskStoreError):
    """An INSERT/UPDATE/DELETE failed."""
