from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

import pytest

from zsnap.log_utils import setup_logging


def test_setup_logging_leaves_existing_config_alone(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])

    assert setup_logging(tmp_path) is None
    assert not (tmp_path / "zsnap.log").exists()


def test_setup_logging_writes_log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)

    log_path = setup_logging(tmp_path / "home")
    try:
        assert log_path == tmp_path / "home" / "zsnap.log"
        logging.getLogger("zsnap.test").info("hello from test")
        for h in root.handlers:
            h.flush()
        assert "[INFO] hello from test" in log_path.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            h.close()
