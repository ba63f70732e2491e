from __future__ import annotations

import logging

import pytest

from zsnap.settings import Namespace, default_settings, merge_defaults


def test_merge_fills_missing_keys_without_overwriting() -> None:
    loaded = Namespace("zsnap", {"CheckUpdates": "False"})
    added = merge_defaults(loaded, default_settings())

    assert loaded.as_dict() == {
        "CheckUpdates": "False",
        "StoreBackups": "True",
        "LoadExternals": "True",
        "LogUploads": "True",
    }
    assert added == ["StoreBackups", "LoadExternals", "LogUploads"]


def test_merge_keeps_keys_unknown_to_defaults() -> None:
    loaded = Namespace("zsnap", {"LegacyOption": "1", "HostingService": "imgur"})
    merge_defaults(loaded, default_settings())

    assert loaded.get("LegacyOption") == "1"
    assert loaded.get("HostingService") == "imgur"


def test_merge_is_idempotent() -> None:
    defaults = default_settings()
    loaded = Namespace("zsnap", {"StoreBackups": "False"})

    merge_defaults(loaded, defaults)
    once = loaded.as_dict()
    assert merge_defaults(loaded, defaults) == []
    assert loaded.as_dict() == once


@pytest.mark.parametrize(
    "entries",
    [
        {},
        {"StoreBackups": "False", "LogUploads": "False"},
        {"CheckUpdates": "garbage", "Extra": "x"},
    ],
)
def test_merge_is_superset_with_loaded_values_winning(entries: dict) -> None:
    defaults = default_settings()
    loaded = Namespace("zsnap", entries)
    merge_defaults(loaded, defaults)
    merged = loaded.as_dict()

    for key, value in entries.items():
        assert merged[key] == value
    for key in defaults.keys():
        if key not in entries:
            assert merged[key] == defaults.get(key)


def test_merge_bypasses_lock() -> None:
    loaded = Namespace("zsnap", {"CheckUpdates": "False"}).lock()
    merge_defaults(loaded, default_settings())
    assert loaded.get("StoreBackups") == "True"
    assert loaded.locked


def test_merge_logs_added_keys(caplog: pytest.LogCaptureFixture) -> None:
    loaded = Namespace("zsnap")
    with caplog.at_level(logging.INFO, logger="zsnap.settings.merge"):
        merge_defaults(loaded, default_settings())
    assert "filled 4 missing setting(s)" in caplog.text


def test_default_settings_are_locked_and_fresh() -> None:
    a = default_settings()
    b = default_settings()
    assert a.locked and b.locked
    assert a is not b
    assert a.name == "zsnap"
