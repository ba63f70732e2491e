"""Setting keys and the built-in default namespace."""

from __future__ import annotations

from .namespace import Namespace

NAMESPACE = "zsnap"

SETTING_CAPTUREMODE = "CaptureMode"
SETTING_DOBACKUP = "StoreBackups"
SETTING_DOLOGGING = "LogUploads"
SETTING_MODS = "LoadExternals"
SETTING_UPDATES = "CheckUpdates"
SETTING_HOST = "HostingService"


def default_settings() -> Namespace:
    """Return a fresh, locked default namespace.

    ``CaptureMode`` and ``HostingService`` have no default; readers must treat
    them as optional.
    """
    return Namespace(
        NAMESPACE,
        {
            SETTING_DOBACKUP: True,
            SETTING_MODS: True,
            SETTING_UPDATES: True,
            SETTING_DOLOGGING: True,
        },
    ).lock()


__all__ = [
    "NAMESPACE",
    "SETTING_CAPTUREMODE",
    "SETTING_DOBACKUP",
    "SETTING_DOLOGGING",
    "SETTING_MODS",
    "SETTING_UPDATES",
    "SETTING_HOST",
    "default_settings",
]
