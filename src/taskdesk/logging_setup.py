# src/taskdesk/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskdesk.log"

logger = logging.getLogger(__name__)


class _OwnLogsFilter(logging.Filter):
    """Console shows taskdesk records at the configured level; anything else only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith("taskdesk.") or record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdesk",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Install a stderr handler and, when possible, a DEBUG file handler in `log_dir`.

    An unusable log directory is not fatal: the app then logs to the console only
    (the same directory usually holds the database, which degrades to memory-only).
    Returns the log file path, or None if there is no file handler.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_OwnLogsFilter())
    root.addHandler(console)

    log_file = Path(log_dir) / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot write %s (%s), logging to console only.", log_file, e)
        return None

    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
    return log_file
