# src/taskdesk/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loads tasks), then runs the console
REPL in the main thread until /exit, EOF, Ctrl+C or SIGTERM.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # TaskStore uses short-lived sqlite connections per call; nothing to flush or close.
    # Ticked-but-not-deleted flags are memory only and are dropped here.
    pending = sum(1 for t in state.tasks.active_tasks if t.is_finished)
    if pending:
        logger.info("Exiting with %d ticked task(s) not deleted; they stay active.", pending)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/taskdesk")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "taskdesk"))

    state = create_initial_state(settings=settings)

    def _handle_sigterm(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_sigterm)
    except (ValueError, OSError, AttributeError):
        # Some platforms may not support SIGTERM.
        pass

    try:
        run_console_loop(state)
    except KeyboardInterrupt:
        # Signal or Ctrl+C while a command was running (input() handles its own).
        logger.info("Interrupted, shutting down...")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
