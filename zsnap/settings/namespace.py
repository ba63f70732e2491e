from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Type

from .errors import KeyNotFound, NamespaceLocked
from .typed import Retrieved, parse_value, to_setting_string


class Namespace:
    """A named collection of string settings with a one-way lock.

    While unlocked the namespace acts as a builder (``set`` inserts or
    overwrites). After :meth:`lock` every public mutation raises
    :class:`NamespaceLocked`; the only exemption is the default merge step
    (see ``zsnap.settings.merge``), which runs once right after load.

    Keys keep insertion order so persisted files are deterministic.
    """

    __slots__ = ("_name", "_entries", "_locked")

    def __init__(self, name: str, entries: Optional[Mapping[str, Any]] = None) -> None:
        name = str(name or "")
        if not name.strip():
            raise ValueError("Namespace name must be a non-empty string")
        self._name = name
        self._entries: Dict[str, str] = {}
        self._locked = False
        for key, value in (entries or {}).items():
            self.set(key, value)

    def __repr__(self) -> str:
        state = "locked" if self._locked else "open"
        return f"Namespace({self._name!r}, {len(self._entries)} keys, {state})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def locked(self) -> bool:
        return self._locked

    # ------------------------------ reads ------------------------------

    def get(self, key: str) -> str:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyNotFound(self._name, key) from None

    def retrieve_safe(self, key: str, target: Type[Any]) -> Retrieved:
        """Fetch *key* and parse it as *target*; never raises on bad data.

        Returns ``Retrieved(value, ok)``. ``ok`` is False when the key is
        missing or the stored string does not parse, in which case ``value``
        is the zero value of *target* and the caller picks a fallback::

            enabled, ok = settings.retrieve_safe("CheckUpdates", bool)
            if not ok:
                enabled = True

        Unsupported target types raise ``TypeError``.
        """
        return parse_value(self._entries.get(key), target)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def frozen(self) -> Mapping[str, str]:
        """Read-only live view of the entries."""
        return MappingProxyType(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    # ------------------------------ writes ------------------------------

    def set(self, key: str, value: Any) -> None:
        if self._locked:
            raise NamespaceLocked(self._name, key)
        key = str(key)
        if not key:
            raise ValueError("Setting keys must be non-empty strings")
        self._entries[key] = to_setting_string(value)

    def lock(self) -> "Namespace":
        self._locked = True
        return self

    def copy(self, name: Optional[str] = None) -> "Namespace":
        """Unlocked copy with the same entries, optionally renamed."""
        return Namespace(name or self._name, self._entries)

    def _backfill(self, key: str, value: str) -> bool:
        # Lock-exempt insert used by the default merger; never overwrites.
        if key in self._entries:
            return False
        self._entries[key] = value
        return True


__all__ = ["Namespace"]
