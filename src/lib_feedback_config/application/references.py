"""Resource reference mini-language.

Purpose
-------
Turn the compact strings stored in ``sound``, ``volume``, and ``vibration``
fields into typed references. Each entry is ``<prefix>:<payload>``:

* sound: ``profile:<key>@<profile>`` or ``filename:<path>``
* volume: ``profile:<key>@<profile>``, ``fixed:<int>`` or
  ``linear:<int>;<int>;<int>``
* vibration: ``profile:<key>@<profile>``, ``filename:<path>`` or
  ``internal:<int>``

Fields hold several entries separated by ``;``. A bad entry is dropped on its
own; the rest of the field still applies.

Contents
--------
* :func:`parse_sound` / :func:`parse_volume` / :func:`parse_vibration` – pure
  single-entry parsers raising :class:`InvalidReference`.
* :func:`split_entries` / :func:`volume_candidates` – field tokenisers.
* :func:`resolve_path` – ``filename:`` lookup against a search directory.
* :class:`ReferenceParser` – field-level parsing with interning and
  diagnostics, used by the event materializer.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Iterator, Mapping, TypeVar

from ..domain.diagnostics import DiagnosticKind
from ..domain.errors import InvalidReference
from ..domain.model import (
    FileSound,
    FileVibration,
    FixedVolume,
    InternalVibration,
    LinearVolume,
    ProfileSound,
    ProfileVibration,
    ProfileVolume,
    SoundReference,
    VibrationReference,
    VolumeReference,
)
from ..domain.registry import Registry
from .diagnostics import DiagnosticCollector

_INTEGER = re.compile(r"[+-]?\d+")
_LINEAR_PREFIX = "linear:"
_LINEAR_PARTS = 3

_R = TypeVar("_R")


def split_entries(text: str) -> list[str]:
    """Split a multi-valued field on ``;``, dropping empty entries.

    Examples
    --------
    >>> split_entries("filename:a.wav;profile:x@y;")
    ['filename:a.wav', 'profile:x@y']
    """

    return [entry for entry in text.split(";") if entry]


def volume_candidates(text: str) -> list[str]:
    """Split a volume field into candidate entries.

    ``linear:`` carries its own ``;``-separated triple, so it takes the next
    two tokens with it.

    Examples
    --------
    >>> volume_candidates("linear:10;20;30;fixed:50")
    ['linear:10;20;30', 'fixed:50']
    >>> volume_candidates("profile:ringing.alert.volume@general")
    ['profile:ringing.alert.volume@general']
    """

    tokens = text.split(";")
    candidates: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.startswith(_LINEAR_PREFIX):
            token = ";".join(tokens[index : index + _LINEAR_PARTS])
            index += _LINEAR_PARTS
        else:
            index += 1
        if token:
            candidates.append(token)
    return candidates


def resolve_path(path: str, search_path: str | None) -> str:
    """Return *path* if it exists, else *path* inside *search_path* if that exists.

    Raises
    ------
    InvalidReference
        When neither location exists.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "ring.wav").write_bytes(b"")
    >>> resolve_path("ring.wav", tmp.name) == str(Path(tmp.name) / "ring.wav")
    True
    >>> tmp.cleanup()
    """

    if not path:
        raise InvalidReference("Empty file name")
    if Path(path).exists():
        return path
    if search_path:
        candidate = Path(search_path) / path
        if candidate.exists():
            return str(candidate)
    raise InvalidReference(f"File not found: {path} (search path: {search_path})")


def parse_sound(entry: str, *, search_path: str | None = None) -> SoundReference:
    """Parse one sound entry.

    Examples
    --------
    >>> parse_sound("profile:ringing.alert.tone@general")
    ProfileSound(key='ringing.alert.tone', profile='general')
    """

    return _dispatch(
        entry,
        "sound",
        {
            "profile": lambda payload: ProfileSound(*_profile_key(payload)),
            "filename": lambda payload: FileSound(resolve_path(payload, search_path)),
        },
    )


def parse_volume(entry: str) -> VolumeReference:
    """Parse one volume entry.

    Examples
    --------
    >>> parse_volume("profile:ringtone@general")
    ProfileVolume(key='ringtone', profile='general')
    >>> parse_volume("fixed:80")
    FixedVolume(level=80)
    >>> parse_volume("linear:10;20;30")
    LinearVolume(level=10, ramp=(10, 20, 30))
    """

    return _dispatch(
        entry,
        "volume",
        {
            "profile": lambda payload: ProfileVolume(*_profile_key(payload)),
            "fixed": lambda payload: FixedVolume(_integer(payload)),
            "linear": _linear,
        },
    )


def parse_vibration(entry: str, *, search_path: str | None = None) -> VibrationReference:
    """Parse one vibration entry.

    Examples
    --------
    >>> parse_vibration("internal:3")
    InternalVibration(id=3)
    """

    return _dispatch(
        entry,
        "vibration",
        {
            "profile": lambda payload: ProfileVibration(*_profile_key(payload)),
            "filename": lambda payload: FileVibration(resolve_path(payload, search_path)),
            "internal": lambda payload: InternalVibration(_integer(payload)),
        },
    )


class ReferenceParser:
    """Field-level parser that interns results and reports dropped entries.

    Why
    ----
    The materializer needs whole fields turned into sequences; this class owns
    the search paths, the registry pools, and the diagnostics channel so the
    single-entry parsers stay pure.
    """

    def __init__(
        self,
        registry: Registry,
        diagnostics: DiagnosticCollector,
        *,
        sound_search_path: str | None = None,
        vibration_search_path: str | None = None,
    ) -> None:
        self._registry = registry
        self._diagnostics = diagnostics
        self.sound_search_path = sound_search_path
        self.vibration_search_path = vibration_search_path

    def sounds(self, text: str | None, *, group: str | None = None) -> tuple[SoundReference, ...]:
        if not text:
            return ()
        parsed = self._each(
            split_entries(text),
            lambda entry: parse_sound(entry, search_path=self.sound_search_path),
            field="sound",
            group=group,
        )
        return tuple(self._registry.intern_sound(item) for item in parsed)

    def volume(self, text: str | None, *, group: str | None = None) -> VolumeReference | None:
        """Return the first candidate of *text* that parses, or ``None``."""

        if not text:
            return None
        for item in self._each(volume_candidates(text), parse_volume, field="volume", group=group):
            return self._registry.intern_volume(item)
        return None

    def patterns(self, text: str | None, *, group: str | None = None) -> tuple[VibrationReference, ...]:
        if not text:
            return ()
        parsed = self._each(
            split_entries(text),
            lambda entry: parse_vibration(entry, search_path=self.vibration_search_path),
            field="vibration",
            group=group,
        )
        return tuple(self._registry.intern_pattern(item) for item in parsed)

    def _each(
        self,
        entries: list[str],
        parse: Callable[[str], _R],
        *,
        field: str,
        group: str | None,
    ) -> Iterator[_R]:
        """Yield parsed entries in order, reporting the ones that fail."""

        for entry in entries:
            try:
                yield parse(entry)
            except InvalidReference as exc:
                self._diagnostics.report(
                    DiagnosticKind.MALFORMED_REFERENCE,
                    group,
                    f"Dropping {field} entry {entry!r}: {exc}",
                    field=field,
                    entry=entry,
                )


def _dispatch(entry: str, field: str, handlers: Mapping[str, Callable[[str], _R]]) -> _R:
    prefix, separator, payload = entry.partition(":")
    handler = handlers.get(prefix) if separator else None
    if handler is None:
        allowed = ", ".join(f"{name}:" for name in handlers)
        raise InvalidReference(f"Unknown {field} prefix in {entry!r} (expected one of {allowed})")
    return handler(payload)


def _profile_key(payload: str) -> tuple[str, str | None]:
    key, _, profile = payload.partition("@")
    if not key:
        raise InvalidReference(f"Missing profile key in {payload!r}")
    return key, profile or None


def _integer(payload: str) -> int:
    text = payload.strip()
    if not _INTEGER.fullmatch(text):
        raise InvalidReference(f"Expected an integer, got {payload!r}")
    return int(text)


def _linear(payload: str) -> LinearVolume:
    parts = payload.split(";")
    if len(parts) != _LINEAR_PARTS:
        raise InvalidReference(f"Linear volume needs {_LINEAR_PARTS} integers, got {payload!r}")
    ramp = (_integer(parts[0]), _integer(parts[1]), _integer(parts[2]))
    return LinearVolume(level=ramp[0], ramp=ramp)
