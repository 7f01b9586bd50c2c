"""Projection of resolved property sets into :class:`EventDescriptor` records."""

from __future__ import annotations

from typing import Any

from ..domain.model import EventDescriptor
from ..domain.properties import PropertySet
from ..domain.registry import Registry
from ..domain.schema import SCHEMA_BY_NAME
from ..observability import log_debug
from .references import ReferenceParser

# descriptor attribute -> schema field
_SCALAR_FIELDS = {
    "audio_enabled": "audio_enabled",
    "vibration_enabled": "vibration_enabled",
    "leds_enabled": "led_enabled",
    "backlight_enabled": "backlight_enabled",
    "allow_custom": "allow_custom",
    "max_timeout": "max_timeout",
    "lookup_pattern": "lookup_pattern",
    "silent_enabled": "silent_enabled",
    "event_id": "event_id",
    "tone_generator_enabled": "audio_tonegen_enabled",
    "tone_generator_pattern": "audio_tonegen_pattern",
    "repeat": "audio_repeat",
    "num_repeats": "audio_max_repeats",
    "led_pattern": "led_pattern",
}


def materialize_event(
    name: str,
    props: PropertySet,
    registry: Registry,
    references: ReferenceParser,
    *,
    group: str | None = None,
) -> EventDescriptor:
    """Build the descriptor for *name* from *props* and register it.

    A field missing from *props* falls back to its schema default. The
    ``sound``, ``volume``, and ``vibration`` strings go through the reference
    parser; the registry entry for *name* is replaced if it already exists.
    """

    values: dict[str, Any] = {attribute: _value(props, field) for attribute, field in _SCALAR_FIELDS.items()}
    event = EventDescriptor(
        **values,
        sounds=references.sounds(_value(props, "sound"), group=group),
        volume=references.volume(_value(props, "volume"), group=group),
        patterns=references.patterns(_value(props, "vibration"), group=group),
    )
    registry.add_event(name, event)
    log_debug("event_created", group=group, path=None, event=name)
    return event


def _value(props: PropertySet, field: str) -> Any:
    return props.value(field, SCHEMA_BY_NAME[field].default)
