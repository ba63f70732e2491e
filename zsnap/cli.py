"""Command line interface for zsnap settings."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .log_utils import setup_logging
from .settings import KeyNotFound, SettingsStore, StorageInaccessible, StorageWriteFailed, default_settings, zsnap_home
from .startup import load_settings

log = logging.getLogger(__name__)

EXIT_FATAL = 255


def format_startup_failure(err: StorageInaccessible) -> str:
    """Diagnostic shown to the user when the settings file cannot be opened."""
    cause = err.cause if err.cause is not None else err
    return (
        "zSnap could not start.\n\n"
        "The file used by zSnap to store settings could not be opened.\n"
        "It may be in use by another program, or may have incorrect permission settings.\n\n\n"
        "Provided below is the error message generated:\n\n"
        f'"{cause}"'
    )


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="zsnap", description="Inspect zsnap's persisted settings.")
    ap.add_argument("--home", type=str, default=None, help="Settings directory (default: $ZSNAP_HOME or ~/.zsnap)")
    ap.add_argument("--verbose", action="store_true", help="Log informational messages")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = ap.add_subparsers(dest="command")
    sub.add_parser("show", help="Print all settings as key=value lines (default)")
    p_get = sub.add_parser("get", help="Print a single setting value")
    p_get.add_argument("key")
    sub.add_parser("path", help="Print the settings file path")

    args = ap.parse_args(argv)
    command = args.command or "show"
    home = Path(args.home).expanduser() if args.home else zsnap_home()

    # Console logging only with --verbose; the file log always gets warnings and up.
    setup_logging(home, level=logging.INFO if args.verbose else logging.WARNING, console=args.verbose)
    log.info("zsnap %s starting (home=%s)", __version__, home)

    try:
        store = SettingsStore.open(home)
        settings = load_settings(store, default_settings())
    except StorageInaccessible as e:
        log.error("%s", e)
        print(format_startup_failure(e), file=sys.stderr)
        return EXIT_FATAL
    except StorageWriteFailed as e:
        log.error("%s", e)
        print(f"zSnap could not save its default settings:\n\n{e}", file=sys.stderr)
        return EXIT_FATAL

    if command == "path":
        print(store.path())
        return 0

    if command == "get":
        try:
            print(settings.get(args.key))
        except KeyNotFound as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        return 0

    for key in settings.keys():
        print(f"{key}={settings.get(key)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
