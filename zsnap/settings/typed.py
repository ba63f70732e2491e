"""Typed, non-throwing conversion of stored setting strings.

Settings are persisted as plain strings. Callers in UI and startup paths read
them through :func:`parse_value` (usually via ``Namespace.retrieve_safe``),
which reports failure through the ``ok`` flag instead of raising.
"""

from __future__ import annotations

import enum
import math
from typing import Any, NamedTuple, Optional, Tuple, Type


class Retrieved(NamedTuple):
    """Result of a typed read: ``value`` is only meaningful when ``ok`` is True."""

    value: Any
    ok: bool


SUPPORTED_TYPES: Tuple[type, ...] = (bool, int, float, str)


def zero_value(target: Type[Any]) -> Any:
    """Value reported alongside a failed read (``False``, ``0``, ``0.0``, ``""``)."""
    _check_target(target)
    if isinstance(target, type) and issubclass(target, enum.Enum):
        return None
    return target()


def to_setting_string(value: Any) -> str:
    """String form used for persistence (``True`` -> ``"True"``, enums by name)."""
    if isinstance(value, enum.Enum):
        return value.name
    return str(value)


def parse_value(raw: Optional[str], target: Type[Any]) -> Retrieved:
    _check_target(target)
    if raw is None:
        return Retrieved(zero_value(target), False)

    text = str(raw).strip()
    if issubclass(target, enum.Enum):
        return _parse_enum(text, target)
    if target is bool:
        low = text.lower()
        if low == "true":
            return Retrieved(True, True)
        if low == "false":
            return Retrieved(False, True)
        return Retrieved(False, False)
    if target in (int, float) and "_" in text:
        # Python accepts digit separators; persisted numbers never carry them.
        return Retrieved(zero_value(target), False)
    if target is int:
        try:
            return Retrieved(int(text, 10), True)
        except ValueError:
            return Retrieved(0, False)
    if target is float:
        try:
            val = float(text)
        except ValueError:
            return Retrieved(0.0, False)
        if math.isnan(val) or math.isinf(val):
            return Retrieved(0.0, False)
        return Retrieved(val, True)
    # str: every stored value is already a string
    return Retrieved(str(raw), True)


def _parse_enum(text: str, target: Type[enum.Enum]) -> Retrieved:
    if not text:
        return Retrieved(None, False)
    for member in target:
        if member.name.lower() == text.lower():
            return Retrieved(member, True)
    for member in target:
        if str(member.value) == text:
            return Retrieved(member, True)
    return Retrieved(None, False)


def _check_target(target: Any) -> None:
    if target in SUPPORTED_TYPES:
        return
    if isinstance(target, type) and issubclass(target, enum.Enum):
        return
    raise TypeError(f"Unsupported setting type: {target!r}")


__all__ = ["Retrieved", "SUPPORTED_TYPES", "parse_value", "to_setting_string", "zero_value"]
