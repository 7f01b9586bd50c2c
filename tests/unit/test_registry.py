from __future__ import annotations

import json

from lib_feedback_config.domain.diagnostics import Diagnostic, DiagnosticKind
from lib_feedback_config.domain.model import (
    Definition,
    EventDescriptor,
    FileSound,
    FixedVolume,
    GroupIdentifier,
    GroupKind,
    InternalVibration,
    LinearVolume,
    ProfileSound,
    reference_to_dict,
)
from lib_feedback_config.domain.registry import Registry


def test_interning_returns_shared_instance() -> None:
    registry = Registry()
    first = registry.intern_sound(ProfileSound("ringing.alert.tone", "general"))
    second = registry.intern_sound(ProfileSound("ringing.alert.tone", "general"))
    assert first is second
    assert registry.sounds == (first,)


def test_distinct_references_are_pooled_separately() -> None:
    registry = Registry()
    registry.intern_volume(FixedVolume(80))
    registry.intern_volume(FixedVolume(40))
    registry.intern_pattern(InternalVibration(1))
    assert registry.volumes == (FixedVolume(80), FixedVolume(40))
    assert registry.patterns == (InternalVibration(1),)


def test_last_event_registration_wins() -> None:
    registry = Registry()
    registry.add_event("sms", EventDescriptor(max_timeout=1))
    registry.add_event("sms", EventDescriptor(max_timeout=2))
    assert registry.events["sms"].max_timeout == 2


def test_as_dict_sorts_and_tags_references() -> None:
    registry = Registry()
    registry.add_definition("sms", Definition(long="sms"))
    registry.add_definition("call", Definition(long="ringtone", short="ringtone_short"))
    volume = registry.intern_volume(LinearVolume(10, (10, 20, 30)))
    registry.add_event("b", EventDescriptor(volume=volume))
    registry.add_event("a", EventDescriptor(sounds=(registry.intern_sound(FileSound("/tmp/a.wav")),)))

    payload = registry.as_dict()
    assert list(payload["definitions"]) == ["call", "sms"]
    assert list(payload["events"]) == ["a", "b"]
    assert payload["events"]["b"]["volume"] == {"type": "LinearVolume", "level": 10, "ramp": [10, 20, 30]}
    assert payload["events"]["a"]["sounds"] == [{"type": "FileSound", "path": "/tmp/a.wav"}]
    assert payload["resources"]["volumes"] == [{"type": "LinearVolume", "level": 10, "ramp": [10, 20, 30]}]
    assert "diagnostics" not in payload


def test_to_json_can_include_diagnostics() -> None:
    registry = Registry()
    registry.diagnostics.append(
        Diagnostic(DiagnosticKind.UNRESOLVED_PARENT, "event a@b", "missing parent", {"parent": "b"})
    )
    payload = json.loads(registry.to_json(include_diagnostics=True))
    assert payload["diagnostics"] == [
        {"kind": "unresolved_parent", "group": "event a@b", "message": "missing parent", "parent": "b"}
    ]
    assert payload["general"]["system_volume"] == [0, 0, 0]


def test_event_descriptor_defaults() -> None:
    event = EventDescriptor()
    assert event.tone_generator_pattern == -1
    assert event.sounds == () and event.patterns == () and event.volume is None
    assert event.as_dict()["volume"] is None


def test_reference_to_dict_keeps_optional_profile() -> None:
    assert reference_to_dict(ProfileSound("tone")) == {"type": "ProfileSound", "key": "tone", "profile": None}


def test_group_identifier_base_flag() -> None:
    assert GroupIdentifier(GroupKind.EVENT, "ringtone").is_base
    assert not GroupIdentifier(GroupKind.EVENT, "short", "ringtone").is_base
