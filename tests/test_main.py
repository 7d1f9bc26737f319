# tests/test_main.py

from __future__ import annotations

import logging
import signal
from pathlib import Path

import pytest

from taskdesk import config
from taskdesk.cli import main as main_mod
from taskdesk.connectors import console_connector
from taskdesk.connectors.console_connector import MEMORY_ONLY_WARNING
from taskdesk.logging_setup import LOG_FILE_NAME, setup_logging


@pytest.fixture()
def root_logging():
    """setup_logging() replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)


@pytest.fixture()
def app_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, root_logging) -> pytest.MonkeyPatch:
    """Fresh settings read from env, no real signal handlers, no .env from the repo."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKDESK_DB_PATH", raising=False)
    monkeypatch.setenv("TASKDESK_LOG_LEVEL", "INFO")
    monkeypatch.setattr(config, "_SETTINGS", None)
    monkeypatch.setattr(signal, "signal", lambda *_args, **_kwargs: None)
    return monkeypatch


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(_prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_setup_logging_writes_file(tmp_path: Path, root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    assert log_file == tmp_path / "logs" / LOG_FILE_NAME
    logging.getLogger("taskdesk.test").debug("hello file")
    for h in root_logging.handlers:
        h.flush()
    assert "hello file" in log_file.read_text("utf-8")


def test_setup_logging_falls_back_to_console(tmp_path: Path, root_logging, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", "utf-8")

    assert setup_logging(log_dir=blocker) is None

    assert len(root_logging.handlers) == 1
    assert "logging to console only" in capsys.readouterr().err


def test_console_filter_hides_third_party_below_error(tmp_path: Path, root_logging, capsys) -> None:
    setup_logging(log_dir=tmp_path)

    logging.getLogger("some.library").warning("library chatter")
    logging.getLogger("some.library").error("library failure")
    logging.getLogger("taskdesk.tasks").info("own info")

    err = capsys.readouterr().err
    assert "library chatter" not in err
    assert "library failure" in err
    assert "own info" in err


def test_main_with_blocked_data_dir_runs_memory_only(app_env, tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", "utf-8")
    app_env.setenv("TASKDESK_DATA_DIR", str(blocker))
    _feed(app_env, ["walk dog", "/exit"])

    main_mod.main()

    captured = capsys.readouterr()
    assert captured.out.count(MEMORY_ONLY_WARNING) == 1
    assert "Added: walk dog (not saved" in captured.out
    assert "logging to console only" in captured.err


def test_main_saves_to_data_dir(app_env, tmp_path: Path, capsys) -> None:
    data_dir = tmp_path / "data"
    app_env.setenv("TASKDESK_DATA_DIR", str(data_dir))
    _feed(app_env, ["buy milk"])

    main_mod.main()

    out = capsys.readouterr().out
    assert "Added: buy milk" in out
    assert "(not saved" not in out
    assert MEMORY_ONLY_WARNING not in out
    assert (data_dir / "todo_list.db").exists()
    assert (data_dir / LOG_FILE_NAME).exists()


def test_interrupt_during_command_shuts_down_cleanly(app_env, tmp_path: Path) -> None:
    app_env.setenv("TASKDESK_DATA_DIR", str(tmp_path / "data"))
    _feed(app_env, ["/list"])

    def interrupted(_state, _line):
        raise KeyboardInterrupt

    app_env.setattr(console_connector, "handle_line", interrupted)

    main_mod.main()
