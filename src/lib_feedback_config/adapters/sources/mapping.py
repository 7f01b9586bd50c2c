"""In-memory configuration source backed by nested mappings.

Purpose
-------
Implement the :class:`lib_feedback_config.application.ports.ConfigSource`
port over the ``group -> field -> raw value`` mappings produced by every file
loader. Key files only carry strings, structured formats carry native values;
:meth:`MappingSource.get` accepts both and applies the key-file coercion rules
to strings.

Contents
--------
* :class:`MappingSource` – the adapter.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from ...domain.errors import NotFound
from ...domain.schema import FieldKind, RawValue, coerce


class MappingSource:
    """Ordered groups of raw values with typed lookup.

    Examples
    --------
    >>> source = MappingSource({"event ringtone": {"max_timeout": "30", "audio_enabled": "true"}})
    >>> source.groups()
    ('event ringtone',)
    >>> source.get("event ringtone", "max_timeout", FieldKind.INT)
    30
    >>> source.get("event ringtone", "audio_enabled", FieldKind.BOOL)
    True
    """

    def __init__(self, groups: Mapping[str, Mapping[str, object]], *, origin: str | None = None) -> None:
        self._groups = MappingProxyType({name: MappingProxyType(dict(fields)) for name, fields in groups.items()})
        self.origin = origin

    def groups(self) -> Sequence[str]:
        return tuple(self._groups)

    def fields(self, group: str) -> Mapping[str, object]:
        """Return the raw field mapping of *group*; raise :class:`NotFound` if absent."""

        try:
            return self._groups[group]
        except KeyError as exc:
            raise NotFound(f"Group not found: {group}") from exc

    def get(self, group: str, field: str, kind: FieldKind) -> RawValue:
        fields = self.fields(group)
        if field not in fields:
            raise NotFound(f"Field {field!r} not found in group {group!r}")
        return coerce(fields[field], kind, field=field)
