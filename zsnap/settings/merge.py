"""Default merging for loaded namespaces."""

from __future__ import annotations

import logging
from typing import List

from .namespace import Namespace

log = logging.getLogger(__name__)


def merge_defaults(loaded: Namespace, defaults: Namespace) -> List[str]:
    """Copy every default key missing from *loaded* into it.

    Existing values always win (a user's customization is never replaced by a
    newer default) and keys unknown to *defaults* are left untouched. The
    merge bypasses the lock check so it can run on a namespace that was locked
    early; running it twice is a no-op.

    Returns the keys that were added, in default order.
    """

    added: List[str] = []
    for key in defaults.keys():
        if loaded._backfill(key, defaults.get(key)):
            added.append(key)

    if added:
        log.info("Namespace %r: filled %d missing setting(s) from defaults: %s", loaded.name, len(added), ", ".join(added))
    return added


__all__ = ["merge_defaults"]
