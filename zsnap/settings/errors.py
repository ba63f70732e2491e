"""Error taxonomy for the settings store.

Errors fall into three groups:

  * environment failures (``StorageInaccessible``, ``StorageWriteFailed``) are
    fatal and travel up to the entry point;
  * logic errors (``DuplicateNamespace``, ``NamespaceLocked``) are raised
    immediately at the offending call;
  * ``KeyNotFound`` is recoverable. Optional settings are read through
    ``Namespace.retrieve_safe`` which never raises.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SettingsError(Exception):
    """Base class for all settings store errors."""


class StorageInaccessible(SettingsError):
    """The persistence medium could not be opened (permissions, in use, corrupt)."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(f"Settings file could not be opened: {self.path} ({detail})")


class StorageWriteFailed(SettingsError):
    """I/O failure while flushing the registry to disk."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(f"Settings file could not be written: {self.path} ({detail})")


class DuplicateNamespace(SettingsError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Namespace already registered: {name!r}")


class NamespaceLocked(SettingsError, RuntimeError):
    def __init__(self, name: str, key: str) -> None:
        self.name = name
        self.key = key
        super().__init__(f"Namespace {name!r} is locked; cannot set {key!r}")


class KeyNotFound(SettingsError, KeyError):
    def __init__(self, namespace: str, key: str) -> None:
        self.namespace = namespace
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key {self.key!r} not found in namespace {self.namespace!r}"


__all__ = [
    "SettingsError",
    "StorageInaccessible",
    "StorageWriteFailed",
    "DuplicateNamespace",
    "NamespaceLocked",
    "KeyNotFound",
]
