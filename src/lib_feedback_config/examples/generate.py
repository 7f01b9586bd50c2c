"""Example configuration asset generation helpers.

Purpose
-------
Produce a reproducible sample ``ngf.ini`` used in documentation, onboarding,
and end-to-end tests. This module belongs to the outer ring of the
architecture and has no runtime coupling to the composition root.

Contents
    - ``EXAMPLE_FILENAME``: name of the generated key file.
    - ``ExampleSpec``: dataclass capturing a relative path and text content.
    - ``generate_examples``: public orchestration expressed through helper
      verbs.
    - ``_build_specs``: yields the example specifications.
    - ``_write_spec`` / ``_should_write`` / ``_ensure_parent``: tiny filesystem
      helpers that narrate how files are written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

EXAMPLE_FILENAME = "ngf.ini"

_EXAMPLE_KEYFILE = """\
# Sample feedback daemon configuration.
[general]
plugins = resource transform gst tonegen
sound_search_path = /usr/share/sounds
vibration_search_path = /usr/share/ngfd/haptics
buffer_time = 200000
latency_time = 100000
system_volume = 0;60;100

[definition ringtone]
long = ringtone
short = ringtone_short
meeting = ringtone_meeting

[definition sms]
long = sms
short = sms_short

# Base event: every field not listed here takes its schema default.
[event ringtone]
max_timeout = 30000
allow_custom = true
audio_enabled = true
audio_repeat = true
sound = profile:ringing.alert.tone@general
volume = profile:ringing.alert.volume@general
vibration_enabled = true
vibration = profile:ringing.vibration.pattern@general;internal:1
led_enabled = true
led_pattern = PatternIncomingCall
backlight_enabled = true

# Derived events inherit everything they do not override.
[event ringtone_short@ringtone]
max_timeout = 5000
audio_repeat = false

[event ringtone_meeting@ringtone]
audio_enabled = false
volume = fixed:0

[event sms]
max_timeout = 10000
audio_enabled = true
sound = profile:sms.alert.tone@general
volume = linear:10;80;3000
vibration_enabled = true
vibration = internal:2
led_enabled = true
led_pattern = PatternCommunication

[event sms_short@sms]
led_enabled = false
"""


@dataclass(slots=True)
class ExampleSpec:
    """Describe a single example file to be written to disk.

    Attributes
    ----------
    relative_path:
        Path relative to the destination directory where the example will be
        created.
    content:
        File contents (UTF-8 text) including explanatory comments.
    """

    relative_path: Path
    content: str


def generate_examples(destination: str | Path, *, force: bool = False) -> list[Path]:
    """Write the sample configuration under *destination*.

    Parameters
    ----------
    destination:
        Directory that will receive the generated files.
    force:
        When ``True`` existing files are overwritten; otherwise the function
        skips files that already exist.

    Returns
    -------
    list[Path]
        Absolute file paths written during this invocation.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> [path.name for path in generate_examples(tmp.name)]
    ['ngf.ini']
    >>> generate_examples(tmp.name)
    []
    >>> tmp.cleanup()
    """

    dest = Path(destination)
    return _write_examples(dest, _build_specs(), force)


def _write_examples(destination: Path, specs: Iterator[ExampleSpec], force: bool) -> list[Path]:
    """Write all ``specs`` under *destination* honouring the *force* flag."""

    written: list[Path] = []
    for spec in specs:
        path = destination / spec.relative_path
        if not _should_write(path, force):
            continue
        _ensure_parent(path)
        _write_spec(path, spec)
        written.append(path)
    return written


def _write_spec(path: Path, spec: ExampleSpec) -> None:
    """Persist ``spec`` content at *path* using UTF-8 encoding."""

    path.write_text(spec.content, encoding="utf-8")


def _should_write(path: Path, force: bool) -> bool:
    """Return ``True`` when *path* should be written respecting *force*."""

    return force or not path.exists()


def _ensure_parent(path: Path) -> None:
    """Create parent directories for *path* when missing."""

    path.parent.mkdir(parents=True, exist_ok=True)


def _build_specs() -> Iterator[ExampleSpec]:
    """Yield :class:`ExampleSpec` instances for every example file."""

    yield ExampleSpec(Path(EXAMPLE_FILENAME), _EXAMPLE_KEYFILE)
