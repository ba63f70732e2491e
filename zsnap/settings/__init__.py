"""Persistent settings for zsnap.

Settings live in named, lockable namespaces of string values. A
:class:`SettingsStore` owns the namespaces and persists them as a single JSON
file under the user's home folder.

Design goals:
  * Atomic writes (no half-written settings file is ever observable)
  * Fail fast when the settings file cannot be opened
  * Defaults are merged in additively; user values always win
  * Typed reads that never raise (``Namespace.retrieve_safe``)
"""

from .defaults import NAMESPACE, default_settings
from .errors import (
    DuplicateNamespace,
    KeyNotFound,
    NamespaceLocked,
    SettingsError,
    StorageInaccessible,
    StorageWriteFailed,
)
from .merge import merge_defaults
from .namespace import Namespace
from .store import SettingsStore, zsnap_home
from .typed import Retrieved

__all__ = [
    "NAMESPACE",
    "default_settings",
    "DuplicateNamespace",
    "KeyNotFound",
    "NamespaceLocked",
    "SettingsError",
    "StorageInaccessible",
    "StorageWriteFailed",
    "merge_defaults",
    "Namespace",
    "SettingsStore",
    "zsnap_home",
    "Retrieved",
]
