"""Immutable property set produced for each event during resolution.

Purpose
-------
Carry the merged field values of one event, in schema order, together with
provenance describing which event group supplied each value: a read-only
``Mapping`` with an ``origin`` lookup.

Contents
--------
* :class:`PropertySet` – ``Mapping[str, PropertyValue]`` with provenance and
  :meth:`PropertySet.overlay`.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .schema import RawValue, PropertyValue


@dataclass(frozen=True, slots=True)
class PropertySet(MappingABC[str, PropertyValue]):
    """Read-only mapping from field name to :class:`PropertyValue`.

    Parameters
    ----------
    _values:
        Field values in insertion (schema) order.
    _origins:
        Field name to the event name that supplied it. ``None`` marks a schema
        default.

    Examples
    --------
    >>> from lib_feedback_config.domain.schema import FieldKind
    >>> base = PropertySet(
    ...     {"audio_enabled": PropertyValue(FieldKind.BOOL, True), "max_timeout": PropertyValue(FieldKind.INT, 0)},
    ...     {"audio_enabled": "ringtone", "max_timeout": None},
    ... )
    >>> child = PropertySet({"audio_enabled": PropertyValue(FieldKind.BOOL, False)}, {"audio_enabled": "silent"})
    >>> merged = base.overlay(child)
    >>> merged.value("audio_enabled"), merged.origin("audio_enabled")
    (False, 'silent')
    >>> merged.value("max_timeout"), merged.origin("max_timeout") is None
    (0, True)
    """

    _values: Mapping[str, PropertyValue]
    _origins: Mapping[str, str | None]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_values", MappingProxyType(dict(self._values)))
        object.__setattr__(self, "_origins", MappingProxyType(dict(self._origins)))

    def __getitem__(self, key: str) -> PropertyValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def value(self, key: str, default: RawValue = None) -> RawValue:
        """Return the bare value stored under *key*, or *default* when absent."""

        entry = self._values.get(key)
        return default if entry is None else entry.value

    def origin(self, key: str) -> str | None:
        """Return the event that supplied *key*; ``None`` for defaults or absent keys."""

        return self._origins.get(key)

    def overlay(self, child: PropertySet) -> PropertySet:
        """Return a copy of this set with every field of *child* laid on top.

        Fields the child does not carry keep this set's value and provenance.
        Neither operand is modified.
        """

        values = dict(self._values)
        origins = dict(self._origins)
        for key, entry in child.items():
            values[key] = entry
            origins[key] = child.origin(key)
        return PropertySet(values, origins)

    def as_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` of bare values for serialisation."""

        return {key: entry.value for key, entry in self._values.items()}
