"""Logging setup for the zsnap entry points.

zsnap usually runs without a visible console, so log output also goes to a
persistent file next to the settings file.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(
    home: Path,
    *,
    level: int = logging.INFO,
    filename: str = "zsnap.log",
    stream: Optional[IO[str]] = None,
    console: bool = True,
) -> Optional[Path]:
    """Configure the root logger to write to ``<home>/<filename>`` and a console stream.

    The console stream defaults to stderr so command output on stdout stays
    clean; pass ``console=False`` to log to the file only.

    An existing logging configuration (e.g. when embedded or under pytest) is
    left alone. Returns the log file path, or None when the file could not be
    created.
    """

    root = logging.getLogger()
    if root.handlers:
        return None

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(stream if stream is not None else sys.stderr))
    log_path: Optional[Path] = Path(home) / filename
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(str(log_path), mode="a", encoding="utf-8"))
    except OSError:
        # A broken home directory is reported by the settings store itself.
        log_path = None

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    # Hook unhandled exceptions so we get a traceback in the log file.
    def _excepthook(exc_type, exc, tb):
        logging.error("Unhandled exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        logging.error("Unhandled thread exception", exc_info=(args.exc_type, args.exc_value, args.exc_traceback))

    threading.excepthook = _thread_excepthook

    return log_path
