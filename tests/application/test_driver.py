from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lib_feedback_config.adapters.sources.mapping import MappingSource
from lib_feedback_config.application.driver import resolve_source
from lib_feedback_config.domain.diagnostics import DiagnosticKind
from lib_feedback_config.domain.model import (
    Definition,
    FileSound,
    FixedVolume,
    InternalVibration,
    LinearVolume,
    ProfileSound,
)


def kinds(registry) -> list[DiagnosticKind]:
    return [item.kind for item in registry.diagnostics]


def test_full_pass_builds_every_table(tmp_path: Path) -> None:
    (tmp_path / "ring.wav").write_bytes(b"")
    source = MappingSource(
        {
            "general": {"plugins": "resource tonegen", "sound_search_path": str(tmp_path), "system_volume": "0;50;100"},
            "definition ringtone": {"long": "ringtone", "short": "ringtone_short"},
            "event ringtone": {
                "audio_enabled": "true",
                "audio_repeat": "true",
                "audio_max_repeats": "3",
                "led_enabled": "true",
                "audio_tonegen_enabled": "1",
                "audio_tonegen_pattern": "7",
                "sound": "filename:ring.wav;profile:ringing.alert.tone@general",
                "volume": "fixed:60",
                "vibration": "internal:1",
            },
            "event ringtone_short@ringtone": {"audio_repeat": "false"},
        }
    )
    registry = resolve_source(source)

    assert registry.general.required_plugins == ("resource", "tonegen")
    assert registry.general.system_volume == (0, 50, 100)
    assert registry.definitions == {"ringtone": Definition(long="ringtone", short="ringtone_short")}

    event = registry.events["ringtone"]
    assert event.audio_enabled and event.leds_enabled and event.repeat
    assert event.num_repeats == 3
    assert event.tone_generator_enabled is True
    assert event.tone_generator_pattern == 7
    assert event.sounds == (FileSound(str(tmp_path / "ring.wav")), ProfileSound("ringing.alert.tone", "general"))
    assert event.volume == FixedVolume(60)
    assert event.patterns == (InternalVibration(1),)

    short = registry.events["ringtone_short"]
    assert short.repeat is False
    assert short.num_repeats == 3
    assert short.sounds[0] is event.sounds[0]
    assert registry.diagnostics == []


def test_group_order_does_not_matter() -> None:
    registry = resolve_source(
        MappingSource(
            {
                "event child@base": {"max_timeout": "5"},
                "event base": {"volume": "linear:10;80;3000"},
            }
        )
    )
    assert registry.events["child"].volume == LinearVolume(10, (10, 80, 3000))
    assert registry.events["child"].max_timeout == 5


def test_bad_values_never_abort_the_pass(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="lib_feedback_config")
    registry = resolve_source(
        MappingSource(
            {
                "event broken": {"max_timeout": "abc", "sound": "mp3:tone", "vibration": "internal:2"},
                "event ": {"audio_enabled": "true"},
                "event orphan@ghost": {},
            }
        )
    )
    assert set(registry.events) == {"broken", "orphan"}
    assert registry.events["broken"].max_timeout == 0
    assert registry.events["broken"].sounds == ()
    assert registry.events["broken"].patterns == (InternalVibration(2),)
    assert sorted(kind.value for kind in kinds(registry)) == [
        "field_type_mismatch",
        "malformed_identifier",
        "malformed_reference",
        "unresolved_parent",
    ]
    assert len([record for record in caplog.records if record.levelno == logging.WARNING]) == 4


def test_cyclic_events_are_skipped() -> None:
    registry = resolve_source(
        MappingSource(
            {
                "event a@b": {},
                "event b@a": {},
                "event c@a": {},
                "event ok": {},
            }
        )
    )
    assert set(registry.events) == {"ok"}
    cyclic = [item for item in registry.diagnostics if item.kind is DiagnosticKind.CYCLIC_INHERITANCE]
    assert [item.group for item in cyclic] == ["event a@b", "event b@a", "event c@a"]
    assert cyclic[0].details["chain"] == ["a", "b", "a"]


def test_later_event_group_with_same_name_wins() -> None:
    registry = resolve_source(
        MappingSource(
            {
                "event sms": {"max_timeout": "1"},
                "event sms@other": {"max_timeout": "2"},
                "event other": {},
            }
        )
    )
    assert registry.events["sms"].max_timeout == 2


def test_resolution_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_feedback_config")
    resolve_source(MappingSource({"event a": {}, "definition d": {"long": "a"}}))
    messages = [record.getMessage() for record in caplog.records]
    assert "definition_created" in messages
    assert "event_created" in messages
    summary = caplog.records[-1]
    assert summary.getMessage() == "configuration_resolved"
    assert summary.context["events"] == 1  # type: ignore[attr-defined]
    assert summary.context["definitions"] == 1  # type: ignore[attr-defined]
