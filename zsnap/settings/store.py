from __future__ import annotations

import json
import logging
import os
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import DuplicateNamespace, StorageInaccessible, StorageWriteFailed
from .namespace import Namespace

log = logging.getLogger(__name__)

SCHEMA_VERSION = 1
HOME_ENV_VAR = "ZSNAP_HOME"


def zsnap_home() -> Path:
    """Directory holding persisted state (settings file, log file)."""
    override = os.environ.get(HOME_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".zsnap"


@dataclass
class SettingsStore:
    """Registry of namespaces backed by a single JSON file.

    Constructing a store opens the file right away. A missing file is a first
    run and yields an empty registry; any other failure to read or decode it
    raises :class:`StorageInaccessible`, so a store object only exists once
    its medium has been opened successfully.

    ``writeback()`` replaces the file atomically (temp file + ``os.replace``),
    and concurrent calls are serialized.
    """

    filename: str = "settings.json"
    home: Path = field(default_factory=zsnap_home)

    _namespaces: Dict[str, Namespace] = field(default_factory=dict, init=False, repr=False)
    _write_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.home = Path(self.home)
        self._namespaces = self._load()

    @classmethod
    def open(cls, home: Optional[Path] = None, filename: str = "settings.json") -> "SettingsStore":
        return cls(filename=filename, home=Path(home) if home is not None else zsnap_home())

    def path(self) -> Path:
        return self.home / self.filename

    # ------------------------------ registry ------------------------------

    def get_namespace(self, name: str) -> Optional[Namespace]:
        return self._namespaces.get(name)

    def add_namespace(self, namespace: Namespace) -> None:
        if namespace.name in self._namespaces:
            raise DuplicateNamespace(namespace.name)
        self._namespaces[namespace.name] = namespace

    def namespace_names(self) -> List[str]:
        return list(self._namespaces)

    # ------------------------------ persistence ------------------------------

    def reload(self) -> None:
        """Re-read the file, replacing the in-memory registry."""
        self._namespaces = self._load()

    def writeback(self) -> None:
        path = self.path()
        tmp = path.with_suffix(path.suffix + ".tmp")

        payload: Dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "written_at": time.strftime("%Y-%m-%dT%H:%M:%S"),
            "namespaces": {name: ns.as_dict() for name, ns in self._namespaces.items()},
        }
        txt = json.dumps(payload, indent=2, sort_keys=False)

        with self._write_lock:
            try:
                self.home.mkdir(parents=True, exist_ok=True)
                with open(tmp, "w", encoding="utf-8") as f:
                    f.write(txt)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp, path)
            except OSError as e:
                try:
                    tmp.unlink()
                except OSError:
                    pass
                log.error("Writeback of %s failed: %s", path, e)
                raise StorageWriteFailed(path, e) from e

        log.info("Wrote %d namespace(s) to %s", len(self._namespaces), path)

    def _load(self) -> Dict[str, Namespace]:
        path = self.path()
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.info("No settings file at %s (first run)", path)
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise StorageInaccessible(path, e) from e

        try:
            namespaces = _decode(raw)
        except ValueError as e:
            raise StorageInaccessible(path, e) from e

        log.info("Loaded %d namespace(s) from %s", len(namespaces), path)
        return namespaces


def _decode(raw: str) -> Dict[str, Namespace]:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("settings root is not an object")

    version = data.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        log.warning("Unexpected settings schema_version=%r (expected %d)", version, SCHEMA_VERSION)

    blocks = data.get("namespaces", {})
    if not isinstance(blocks, dict):
        raise ValueError("'namespaces' is not an object")

    out: Dict[str, Namespace] = {}
    for name, entries in blocks.items():
        if not isinstance(entries, dict):
            raise ValueError(f"namespace {name!r} is not an object")
        for key, value in entries.items():
            if not isinstance(value, str):
                raise ValueError(f"namespace {name!r}: value of {key!r} is not a string")
        ns = Namespace(name, entries)
        out[ns.name] = ns
    return out


__all__ = ["SCHEMA_VERSION", "HOME_ENV_VAR", "SettingsStore", "zsnap_home"]
