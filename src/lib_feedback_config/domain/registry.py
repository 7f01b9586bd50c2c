"""Process-lifetime owner of everything a resolution pass produces.

Purpose
-------
Hold resolved events, definitions, interned resource references, general
settings, and the diagnostics recorded while resolving. A single resolution
pass builds one :class:`Registry` and hands it to the caller, after which it
is treated as read-only.

Contents
--------
* :class:`Registry` – the container itself.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, TypeVar

from .diagnostics import Diagnostic
from .model import (
    Definition,
    EventDescriptor,
    GeneralSettings,
    SoundReference,
    VibrationReference,
    VolumeReference,
    reference_to_dict,
)

_R = TypeVar("_R")


class Registry:
    """Tables of events, definitions, and interned references.

    Interning hands out one shared instance per distinct reference, so events
    that name the same resource string share the same object.

    Examples
    --------
    >>> from lib_feedback_config.domain.model import FixedVolume
    >>> registry = Registry()
    >>> first = registry.intern_volume(FixedVolume(80))
    >>> registry.intern_volume(FixedVolume(80)) is first
    True
    >>> len(registry.volumes)
    1
    """

    def __init__(self) -> None:
        self.general = GeneralSettings()
        self.events: dict[str, EventDescriptor] = {}
        self.definitions: dict[str, Definition] = {}
        self._sounds: dict[SoundReference, SoundReference] = {}
        self._volumes: dict[VolumeReference, VolumeReference] = {}
        self._patterns: dict[VibrationReference, VibrationReference] = {}
        self.diagnostics: list[Diagnostic] = []

    @property
    def sounds(self) -> tuple[SoundReference, ...]:
        return tuple(self._sounds)

    @property
    def volumes(self) -> tuple[VolumeReference, ...]:
        return tuple(self._volumes)

    @property
    def patterns(self) -> tuple[VibrationReference, ...]:
        return tuple(self._patterns)

    def intern_sound(self, reference: SoundReference) -> SoundReference:
        return _intern(self._sounds, reference)

    def intern_volume(self, reference: VolumeReference) -> VolumeReference:
        return _intern(self._volumes, reference)

    def intern_pattern(self, reference: VibrationReference) -> VibrationReference:
        return _intern(self._patterns, reference)

    def add_event(self, name: str, event: EventDescriptor) -> None:
        """Register *event* under *name*, replacing any previous entry."""

        self.events[name] = event

    def add_definition(self, name: str, definition: Definition) -> None:
        """Register *definition* under *name*, replacing any previous entry."""

        self.definitions[name] = definition

    def as_dict(self, *, include_diagnostics: bool = False) -> dict[str, Any]:
        """Return a JSON-ready snapshot of the registry.

        Events and definitions are sorted by name so output is stable across
        runs regardless of group order in the source.
        """

        payload: dict[str, Any] = {
            "general": _general_to_dict(self.general),
            "definitions": {
                name: {"long": item.long, "short": item.short, "meeting": item.meeting}
                for name, item in sorted(self.definitions.items())
            },
            "events": {name: item.as_dict() for name, item in sorted(self.events.items())},
            "resources": {
                "sounds": _references(self._sounds),
                "volumes": _references(self._volumes),
                "patterns": _references(self._patterns),
            },
        }
        if include_diagnostics:
            payload["diagnostics"] = [item.as_dict() for item in self.diagnostics]
        return payload

    def to_json(self, *, indent: int | None = None, include_diagnostics: bool = False) -> str:
        """Serialise :meth:`as_dict` to JSON."""

        return json.dumps(
            self.as_dict(include_diagnostics=include_diagnostics),
            indent=indent,
            separators=(",", ":"),
            ensure_ascii=False,
        )


def _intern(pool: dict[_R, _R], reference: _R) -> _R:
    return pool.setdefault(reference, reference)


def _references(pool: Iterable[Any]) -> list[dict[str, Any]]:
    return [reference_to_dict(item) for item in pool]


def _general_to_dict(general: GeneralSettings) -> Mapping[str, Any]:
    return {
        "required_plugins": list(general.required_plugins),
        "sound_search_path": general.sound_search_path,
        "vibration_search_path": general.vibration_search_path,
        "buffer_time": general.buffer_time,
        "latency_time": general.latency_time,
        "system_volume": list(general.system_volume),
    }
