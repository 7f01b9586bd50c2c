"""Domain value objects produced by a resolution pass.

Purpose
-------
Define the typed records the daemon consumes once configuration has been
resolved: group identifiers, resource references, event descriptors,
definitions, and the global settings read from the ``general`` group. The
module contains no I/O.

Contents
--------
* :class:`GroupKind` / :class:`GroupIdentifier` – parsed group headers.
* Sound references: :class:`ProfileSound`, :class:`FileSound`.
* Volume references: :class:`ProfileVolume`, :class:`FixedVolume`,
  :class:`LinearVolume`.
* Vibration references: :class:`ProfileVibration`, :class:`FileVibration`,
  :class:`InternalVibration`.
* :class:`EventDescriptor`, :class:`Definition`, :class:`GeneralSettings`.

Every reference is a frozen, hashable dataclass so the registry can intern
equal instances.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Union


class GroupKind(str, Enum):
    """Type tag that prefixes every group name in the configuration source."""

    GENERAL = "general"
    VIBRATOR = "vibra"
    DEFINITION = "definition"
    EVENT = "event"


@dataclass(frozen=True, slots=True)
class GroupIdentifier:
    """Parsed ``"<tag> <name>[@<parent>]"`` group header."""

    kind: GroupKind
    name: str
    parent: str | None = None

    @property
    def is_base(self) -> bool:
        return self.parent is None


@dataclass(frozen=True, slots=True)
class ProfileSound:
    """Sound looked up from a profile key (``profile:<key>@<profile>``)."""

    key: str
    profile: str | None = None


@dataclass(frozen=True, slots=True)
class FileSound:
    """Sound played from a file that existed when configuration was resolved."""

    path: str


@dataclass(frozen=True, slots=True)
class ProfileVolume:
    """Volume looked up from a profile key."""

    key: str
    profile: str | None = None


@dataclass(frozen=True, slots=True)
class FixedVolume:
    """Constant playback volume."""

    level: int


@dataclass(frozen=True, slots=True)
class LinearVolume:
    """Volume ramp; ``level`` is the starting level and ``ramp`` the raw triple."""

    level: int
    ramp: tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class ProfileVibration:
    """Vibration pattern looked up from a profile key."""

    key: str
    profile: str | None = None


@dataclass(frozen=True, slots=True)
class FileVibration:
    """Vibration pattern loaded from a file."""

    path: str


@dataclass(frozen=True, slots=True)
class InternalVibration:
    """Vibration pattern built into the vibrator backend, addressed by id."""

    id: int


SoundReference = Union[ProfileSound, FileSound]
VolumeReference = Union[ProfileVolume, FixedVolume, LinearVolume]
VibrationReference = Union[ProfileVibration, FileVibration, InternalVibration]
ResourceReference = Union[SoundReference, VolumeReference, VibrationReference]


def reference_to_dict(reference: ResourceReference) -> dict[str, Any]:
    """Serialise *reference* to a plain mapping tagged with its type name.

    Examples
    --------
    >>> reference_to_dict(FixedVolume(80))
    {'type': 'FixedVolume', 'level': 80}
    """

    payload: dict[str, Any] = {"type": type(reference).__name__}
    for key, value in asdict(reference).items():
        payload[key] = list(value) if isinstance(value, tuple) else value
    return payload


@dataclass(frozen=True, slots=True)
class EventDescriptor:
    """Fully resolved feedback description for one named event."""

    audio_enabled: bool = False
    vibration_enabled: bool = False
    leds_enabled: bool = False
    backlight_enabled: bool = False
    allow_custom: bool = False
    lookup_pattern: bool = False
    silent_enabled: bool = False
    tone_generator_enabled: bool = False
    repeat: bool = False
    max_timeout: int = 0
    num_repeats: int = 0
    tone_generator_pattern: int = -1
    event_id: str | None = None
    led_pattern: str | None = None
    sounds: tuple[SoundReference, ...] = ()
    volume: VolumeReference | None = None
    patterns: tuple[VibrationReference, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping; references are tagged with their type."""

        payload: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if name in ("sounds", "patterns"):
                payload[name] = [reference_to_dict(item) for item in value]
            elif name == "volume":
                payload[name] = None if value is None else reference_to_dict(value)
            else:
                payload[name] = value
        return payload


@dataclass(frozen=True, slots=True)
class Definition:
    """Maps a logical notification category to its long/short/meeting events."""

    long: str | None = None
    short: str | None = None
    meeting: str | None = None


@dataclass(frozen=True, slots=True)
class GeneralSettings:
    """Daemon-wide values read from the ``general`` group."""

    required_plugins: tuple[str, ...] = ()
    sound_search_path: str | None = None
    vibration_search_path: str | None = None
    buffer_time: int = 0
    latency_time: int = 0
    system_volume: tuple[int, int, int] = field(default=(0, 0, 0))
