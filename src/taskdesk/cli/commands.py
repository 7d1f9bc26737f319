# src/taskdesk/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.rows import active_rows, finished_rows, format_row
from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other text adds it as a new task.")
        lines.append("  Start with // to add a task whose name begins with /.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_lists(state: AppState) -> str:
    """Current tasks with checkboxes, plus the finished list when it is shown."""
    rows = active_rows(state.tasks)
    lines = ["Current tasks:"]
    lines.extend(f"  {format_row(r)}" for r in rows)
    if not rows:
        lines.append("  (none)")

    if state.show_finished:
        done = finished_rows(state.tasks)
        lines.append("Finished tasks:")
        lines.extend(f"  {format_row(r, checkbox=False)}" for r in done)
        if not done:
            lines.append("  (none)")
    return "\n".join(lines)


def add_task(state: AppState, text: str) -> str | None:
    """Add `text` as a task (the input field + Enter). None if there was nothing to add."""
    name = text.strip()
    if not name:
        return None
    if state.tasks.add(name):
        return f"Added: {name}"
    return f"Added: {name} (not saved, it will be lost on exit)"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_lists(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done 2       -> tick/untick task #2
    /done 1 3     -> several at once
    """
    if not args:
        return "Usage: /done N [N ...] (numbers from /list)."

    total = len(state.tasks.active_tasks)
    out: list[str] = []
    for raw in args:
        try:
            number = int(raw)
        except ValueError:
            out.append(f"Not a task number: {raw}")
            continue
        if not 1 <= number <= total:
            out.append(f"No task #{number} (there are {total}).")
            continue

        state.tasks.toggle(number - 1)
        row = active_rows(state.tasks)[number - 1]
        out.append(format_row(row))
    return "\n".join(out)


def cmd_delete(state: AppState, args: list[str]) -> str:
    before = len(state.tasks.active_tasks)
    flagged = sum(1 for t in state.tasks.active_tasks if t.is_finished)
    if not flagged:
        return "Nothing selected. Tick tasks with /done N first."

    active, _finished = state.tasks.delete_selected()
    moved = before - len(active)
    if moved == 0:
        logger.debug("delete_selected moved nothing (flagged=%d).", flagged)
        return "Could not save changes, nothing was moved (see log)."
    return f"Moved {moved} task(s) to finished."


def cmd_finished(state: AppState, args: list[str]) -> str:
    state.show_finished = not state.show_finished
    if not state.show_finished:
        return "Finished list hidden."
    return render_lists(state)


def cmd_clear(state: AppState, args: list[str]) -> str:
    if not state.show_finished:
        return "Show the finished list first: /finished"
    if state.tasks.clear_finished_history():
        return "Finished list cleared."
    return "Finished list cleared here, but storage could not be updated (see log)."


def cmd_status(state: AppState, args: list[str]) -> str:
    db_path = getattr(state.settings, "tasks_db_path", "?")
    mode = "SAVED TO DISK" if state.tasks.persistent else "MEMORY ONLY"
    return (
        "Status:\n"
        f"  Storage: {mode} ({db_path})\n"
        f"  Current tasks: {len(state.tasks.active_tasks)}\n"
        f"  Finished tasks: {len(state.tasks.finished_tasks)}\n"
        f"  Finished list: {'shown' if state.show_finished else 'hidden'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task lists.", aliases=["ls"])
registry.register(
    "done", cmd_done, help_text="Tick/untick tasks: /done N [N ...].", aliases=["toggle", "t"]
)
registry.register("delete", cmd_delete, help_text="Delete ticked tasks (move to finished).", aliases=["d"])
registry.register("finished", cmd_finished, help_text="Show/hide the finished list.", aliases=["f"])
registry.register("clear", cmd_clear, help_text="Clear the finished list (when shown).")
registry.register("status", cmd_status, help_text="Show storage mode and counts.")
