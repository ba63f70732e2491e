from __future__ import annotations

import threading
from typing import List

from zsnap.settings import Namespace
from zsnap.startup import start_update_checks
from zsnap.updates import UpdateCheckTimer, UpdateInfo


class _FakeChecker:
    def __init__(self, info: UpdateInfo) -> None:
        self.info = info
        self.calls = 0
        self.called = threading.Event()

    def check(self) -> UpdateInfo:
        self.calls += 1
        if self.calls >= 2:
            self.called.set()
        return self.info


class _FailingChecker:
    def check(self) -> UpdateInfo:
        raise ConnectionError("offline")


def test_timer_checks_now_and_notifies() -> None:
    seen: List[UpdateInfo] = []
    checker = _FakeChecker(UpdateInfo(True, "2.1.0"))
    timer = UpdateCheckTimer(checker, seen.append, interval_s=3600)
    try:
        info = timer.start()
        assert info == UpdateInfo(True, "2.1.0")
        assert seen == [info]
        assert checker.calls == 1
        assert timer.pending
    finally:
        timer.cancel()


def test_timer_rechecks_once() -> None:
    checker = _FakeChecker(UpdateInfo(False))
    timer = UpdateCheckTimer(checker, interval_s=0.01)
    timer.start()

    assert checker.called.wait(5.0)
    assert checker.calls == 2
    assert timer.last_result == UpdateInfo(False)


def test_timer_survives_checker_failure() -> None:
    timer = UpdateCheckTimer(_FailingChecker(), interval_s=3600)
    try:
        assert timer.start() is None
        assert timer.last_result is None
    finally:
        timer.cancel()


def test_start_update_checks_respects_setting() -> None:
    checker = _FakeChecker(UpdateInfo(False))
    settings = Namespace("zsnap", {"CheckUpdates": "False"}).lock()

    assert start_update_checks(settings, checker) is None
    assert checker.calls == 0


def test_start_update_checks_when_enabled() -> None:
    checker = _FakeChecker(UpdateInfo(False))
    settings = Namespace("zsnap", {"CheckUpdates": "True"}).lock()

    timer = start_update_checks(settings, checker)
    try:
        assert timer is not None
        assert checker.calls == 1
    finally:
        timer.cancel()
