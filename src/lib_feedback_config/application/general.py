"""Daemon-wide settings from the ``[general]`` group.

The group lists the plugins the daemon must load, the search directories used
to resolve ``filename:`` references, audio buffer timings, and the system
volume triple. Every field is optional; missing or malformed values keep the
:class:`GeneralSettings` defaults.
"""

from __future__ import annotations

from ..domain.diagnostics import DiagnosticKind
from ..domain.errors import InvalidValue, NotFound
from ..domain.model import GeneralSettings, GroupKind
from ..domain.schema import FieldKind, RawValue, coerce
from .diagnostics import DiagnosticCollector
from .ports import ConfigSource

GENERAL_GROUP = GroupKind.GENERAL.value
_VOLUME_LEVELS = 3


def parse_general(source: ConfigSource, diagnostics: DiagnosticCollector) -> GeneralSettings:
    """Read the ``general`` group of *source*.

    Examples
    --------
    >>> from lib_feedback_config.adapters.sources.mapping import MappingSource
    >>> source = MappingSource({"general": {"plugins": "tonegen  vibrator", "system_volume": "0;40;80"}})
    >>> settings = parse_general(source, DiagnosticCollector())
    >>> settings.required_plugins, settings.system_volume
    (('tonegen', 'vibrator'), (0, 40, 80))
    """

    defaults = GeneralSettings()
    reader = _GroupReader(source, diagnostics)
    plugins = reader.get("plugins", FieldKind.STRING)
    return GeneralSettings(
        required_plugins=tuple(plugins.split()) if isinstance(plugins, str) else defaults.required_plugins,
        sound_search_path=reader.get("sound_search_path", FieldKind.STRING),
        vibration_search_path=reader.get("vibration_search_path", FieldKind.STRING),
        buffer_time=reader.get("buffer_time", FieldKind.INT, defaults.buffer_time),  # type: ignore[arg-type]
        latency_time=reader.get("latency_time", FieldKind.INT, defaults.latency_time),  # type: ignore[arg-type]
        system_volume=reader.system_volume(defaults.system_volume),
    )


class _GroupReader:
    """Typed field access to the ``general`` group with diagnostics on mismatch."""

    def __init__(self, source: ConfigSource, diagnostics: DiagnosticCollector) -> None:
        self._source = source
        self._diagnostics = diagnostics

    def get(self, field: str, kind: FieldKind, default: RawValue = None) -> RawValue:
        try:
            return self._source.get(GENERAL_GROUP, field, kind)
        except NotFound:
            return default
        except InvalidValue as exc:
            self._mismatch(field, kind, exc.raw, default)
            return default

    def system_volume(self, default: tuple[int, int, int]) -> tuple[int, int, int]:
        """Return the first three ``;``-separated levels, or *default* when fewer exist.

        A short or non-numeric list is all-or-nothing: none of its levels are
        applied, where the daemon itself would keep the leading levels it
        managed to read.
        """

        raw = self.get("system_volume", FieldKind.STRING)
        if not isinstance(raw, str):
            return default
        parts = [part for part in raw.split(";") if part]
        if len(parts) < _VOLUME_LEVELS:
            self._mismatch("system_volume", FieldKind.STRING, raw, default)
            return default
        try:
            levels = [coerce(part, FieldKind.INT, field="system_volume") for part in parts[:_VOLUME_LEVELS]]
        except InvalidValue:
            self._mismatch("system_volume", FieldKind.STRING, raw, default)
            return default
        return (levels[0], levels[1], levels[2])  # type: ignore[return-value]

    def _mismatch(self, field: str, kind: FieldKind, raw: object, default: object) -> None:
        self._diagnostics.report(
            DiagnosticKind.FIELD_TYPE_MISMATCH,
            GENERAL_GROUP,
            f"Invalid value for property {field}, expected {kind.value}. Using default value {default!r}",
            field=field,
            raw=raw,
            fallback=default,
        )
