# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import add_task, render_lists
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

MEMORY_ONLY_WARNING = (
    "[WARN] Could not open the task database. "
    "This session is memory-only: tasks you add will not be saved."
)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    One line of user input -> reply text.

    Slash commands go to the registry; anything else is a new task.
    A leading "//" escapes the slash.
    Returns None when there is nothing to say (empty input).
    """
    text = line.strip()
    if not text:
        return None

    try:
        if text.startswith("//"):
            reply = add_task(state, text[1:])
        else:
            reply = command_registry.handle(state, text)
            if reply is None:
                reply = add_task(state, text)
    except Exception:
        logger.exception("Console handler crashed on %r.", text)
        return "Internal error while handling input."
    return reply


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (persistent=%s).", state.tasks.persistent)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskdesk"))

    _print_ts(f"[{app_name}] Type a task and press Enter to add it. Use /help for commands, /exit to quit.")
    if state.store_warning:
        _print_ts(MEMORY_ONLY_WARNING)
    print(render_lists(state))

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            print(reply)

    logger.info("Console connector finished.")
