"""Static schema of the properties an event group may carry.

Purpose
-------
Describe, once, every field the resolver reads from an event group together
with its kind and default value, and provide the closed value type stored in
resolved property sets.

Contents
--------
* :class:`FieldKind` – the three raw value kinds (string, integer, boolean).
* :class:`PropertyValue` – a value tagged with its kind, validated on creation.
* :class:`FieldSpec` – one schema row (name, kind, default).
* :data:`EVENT_SCHEMA` – ordered tuple of all recognised event fields.
* :data:`SCHEMA_BY_NAME` – lookup table keyed by field name.
* :func:`coerce` – raw source value to schema kind conversion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from .errors import InvalidValue

RawValue = Union[str, int, bool, None]

_INTEGER = re.compile(r"[+-]?\d+")
_TRUE = frozenset({"true", "1"})
_FALSE = frozenset({"false", "0"})


class FieldKind(str, Enum):
    """Kind of a raw configuration value."""

    STRING = "string"
    INT = "integer"
    BOOL = "boolean"

    def accepts(self, value: object) -> bool:
        """Return ``True`` when *value* is a valid Python value for this kind.

        ``bool`` is a subclass of ``int`` in Python; it is rejected for
        :attr:`INT` so flags never masquerade as counters. ``None`` is only
        valid for strings, whose schema default is "unset".

        Examples
        --------
        >>> FieldKind.INT.accepts(3), FieldKind.INT.accepts(True)
        (True, False)
        >>> FieldKind.STRING.accepts(None)
        True
        """

        if self is FieldKind.STRING:
            return value is None or isinstance(value, str)
        if self is FieldKind.BOOL:
            return isinstance(value, bool)
        return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class PropertyValue:
    """A resolved property value tagged with its :class:`FieldKind`.

    Examples
    --------
    >>> PropertyValue(FieldKind.BOOL, True).value
    True
    >>> PropertyValue(FieldKind.INT, "3")
    Traceback (most recent call last):
    ...
    TypeError: '3' is not a valid integer value
    """

    kind: FieldKind
    value: RawValue

    def __post_init__(self) -> None:
        if not self.kind.accepts(self.value):
            raise TypeError(f"{self.value!r} is not a valid {self.kind.value} value")


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One row of the event schema."""

    name: str
    kind: FieldKind
    default: RawValue

    def default_value(self) -> PropertyValue:
        return PropertyValue(self.kind, self.default)


EVENT_SCHEMA: tuple[FieldSpec, ...] = (
    # general
    FieldSpec("max_timeout", FieldKind.INT, 0),
    FieldSpec("allow_custom", FieldKind.BOOL, False),
    FieldSpec("dummy", FieldKind.INT, 0),
    # sound
    FieldSpec("audio_enabled", FieldKind.BOOL, False),
    FieldSpec("audio_repeat", FieldKind.BOOL, False),
    FieldSpec("audio_max_repeats", FieldKind.INT, 0),
    FieldSpec("sound", FieldKind.STRING, None),
    FieldSpec("silent_enabled", FieldKind.BOOL, False),
    FieldSpec("volume", FieldKind.STRING, None),
    FieldSpec("event_id", FieldKind.STRING, None),
    # tone generator
    FieldSpec("audio_tonegen_enabled", FieldKind.BOOL, False),
    FieldSpec("audio_tonegen_pattern", FieldKind.INT, -1),
    # vibration
    FieldSpec("vibration_enabled", FieldKind.BOOL, False),
    FieldSpec("lookup_pattern", FieldKind.BOOL, False),
    FieldSpec("vibration", FieldKind.STRING, None),
    # led
    FieldSpec("led_enabled", FieldKind.BOOL, False),
    FieldSpec("led_pattern", FieldKind.STRING, None),
    # backlight
    FieldSpec("backlight_enabled", FieldKind.BOOL, False),
)
"""Every field an event group may set, in the order the resolver scans them."""

SCHEMA_BY_NAME: Mapping[str, FieldSpec] = MappingProxyType({spec.name: spec for spec in EVENT_SCHEMA})


def coerce(raw: object, kind: FieldKind, *, field: str) -> RawValue:
    """Convert *raw* to a value of *kind*, raising :class:`InvalidValue` on mismatch.

    Strings follow key-file rules: integers are plain decimal numbers with an
    optional sign, booleans are ``true``/``false``/``1``/``0`` (any case).
    Native values must already have the right type.

    Examples
    --------
    >>> coerce(" 42 ", FieldKind.INT, field="max_timeout")
    42
    >>> coerce("FALSE", FieldKind.BOOL, field="audio_enabled")
    False
    >>> coerce("abc", FieldKind.INT, field="max_timeout")
    Traceback (most recent call last):
    ...
    lib_feedback_config.domain.errors.InvalidValue: Invalid value for max_timeout, expected integer: 'abc'
    """

    if kind is FieldKind.STRING:
        if isinstance(raw, str):
            return raw
    elif isinstance(raw, str):
        text = raw.strip()
        if kind is FieldKind.INT and _INTEGER.fullmatch(text):
            return int(text)
        if kind is FieldKind.BOOL:
            lowered = text.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
    elif kind.accepts(raw):
        return raw  # type: ignore[return-value]
    raise InvalidValue(f"Invalid value for {field}, expected {kind.value}: {raw!r}", field=field, raw=raw)
