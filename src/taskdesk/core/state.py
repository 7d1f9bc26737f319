# src/taskdesk/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_list import TaskListManager


@dataclass
class AppState:
    # Settings object (config.Settings or a SimpleNamespace in tests).
    settings: Any

    tasks: TaskListManager

    # UI flags owned by the presentation side.
    show_finished: bool = False
    store_warning: bool = False
