"""Update check scheduling.

The actual version lookup lives in an external service; this module only
defines the interface it must satisfy and the timing policy: one check at
startup and a single re-check half an hour later. The timer then stops so an
absent user is not prompted over and over.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

log = logging.getLogger(__name__)

UPDATE_RECHECK_INTERVAL_S = 30 * 60


@dataclass(frozen=True)
class UpdateInfo:
    is_available: bool
    version: Optional[str] = None


class UpdateChecker(Protocol):
    def check(self) -> UpdateInfo:
        ...


class UpdateCheckTimer:
    """Run *checker* now and once more after *interval_s* seconds."""

    def __init__(
        self,
        checker: UpdateChecker,
        on_update: Optional[Callable[[UpdateInfo], None]] = None,
        *,
        interval_s: float = UPDATE_RECHECK_INTERVAL_S,
    ) -> None:
        self._checker = checker
        self._on_update = on_update
        self._interval_s = float(interval_s)
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self.last_result: Optional[UpdateInfo] = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_alive()

    def start(self) -> Optional[UpdateInfo]:
        """Check immediately, schedule the re-check and return the first result."""
        info = self._run_check()
        with self._lock:
            if self._timer is None:
                self._timer = threading.Timer(self._interval_s, self._run_check)
                self._timer.daemon = True
                self._timer.start()
        return info

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()

    def _run_check(self) -> Optional[UpdateInfo]:
        try:
            info = self._checker.check()
        except Exception as e:
            # Checker failures are logged and reported as "no result".
            log.warning("Update check failed: %s: %s", type(e).__name__, e)
            return None

        self.last_result = info
        if info.is_available:
            log.info("Update available: %s", info.version or "unknown version")
            if self._on_update is not None:
                self._on_update(info)
        else:
            log.info("No update available")
        return info


__all__ = ["UPDATE_RECHECK_INTERVAL_S", "UpdateInfo", "UpdateChecker", "UpdateCheckTimer"]
