"""Startup sequence: load (or seed) the application namespace and lock it.

Typical use from an entry point::

    store = SettingsStore.open()          # may raise StorageInaccessible
    defaults = default_settings()
    settings = load_settings(store, defaults)
    if should_check_updates(settings, defaults):
        ...

After :func:`load_settings` returns, the namespace is locked and can be
shared with timers and UI callbacks without further synchronization.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Type

from .settings.defaults import SETTING_UPDATES, default_settings
from .settings.errors import StorageInaccessible, StorageWriteFailed
from .settings.merge import merge_defaults
from .settings.namespace import Namespace
from .settings.store import SettingsStore
from .settings.typed import parse_value
from .updates import UpdateChecker, UpdateCheckTimer, UpdateInfo

log = logging.getLogger(__name__)


def load_settings(store: SettingsStore, defaults: Optional[Namespace] = None) -> Namespace:
    """Return the locked application namespace, seeding defaults on first run.

    First run and regular load share one path: when the namespace is missing,
    the defaults are registered and written back, the file is re-read and the
    lookup starts over. Missing keys of a loaded namespace are then filled in
    from *defaults* without touching existing values.
    """

    defaults = defaults if defaults is not None else default_settings()
    seeded = False

    while True:
        loaded = store.get_namespace(defaults.name)
        if loaded is not None:
            break
        if seeded:
            raise StorageInaccessible(
                store.path(),
                RuntimeError(f"namespace {defaults.name!r} missing after writeback"),
            )
        log.info("Namespace %r not found; seeding defaults", defaults.name)
        store.add_namespace(defaults)
        try:
            store.writeback()
        except StorageWriteFailed:
            # Drop the unpersisted defaults so the registry matches the file again.
            store.reload()
            raise
        store.reload()
        seeded = True

    merge_defaults(loaded, defaults)
    return loaded.lock()


def retrieve_or_default(settings: Namespace, key: str, target: Type[Any], defaults: Namespace) -> Any:
    """Typed read of *key*, falling back to the default namespace's value.

    Returns the zero value of *target* when neither namespace holds a usable
    value.
    """

    value, ok = settings.retrieve_safe(key, target)
    if ok:
        return value
    log.warning("Setting %r in %r is missing or malformed; using default", key, settings.name)
    return parse_value(defaults.frozen().get(key), target).value


def should_check_updates(settings: Namespace, defaults: Optional[Namespace] = None) -> bool:
    defaults = defaults if defaults is not None else default_settings()
    return bool(retrieve_or_default(settings, SETTING_UPDATES, bool, defaults))


def start_update_checks(
    settings: Namespace,
    checker: UpdateChecker,
    *,
    defaults: Optional[Namespace] = None,
    on_update: Optional[Callable[[UpdateInfo], None]] = None,
) -> Optional[UpdateCheckTimer]:
    """Start the update timer when ``CheckUpdates`` allows it."""

    if not should_check_updates(settings, defaults):
        log.info("Update checks disabled by settings")
        return None
    timer = UpdateCheckTimer(checker, on_update)
    timer.start()
    return timer


__all__ = ["load_settings", "retrieve_or_default", "should_check_updates", "start_update_checks"]
