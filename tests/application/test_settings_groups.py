from __future__ import annotations

from lib_feedback_config.adapters.sources.mapping import MappingSource
from lib_feedback_config.application.definitions import parse_definitions
from lib_feedback_config.application.diagnostics import DiagnosticCollector
from lib_feedback_config.application.general import parse_general
from lib_feedback_config.domain.diagnostics import DiagnosticKind
from lib_feedback_config.domain.model import Definition, GeneralSettings
from lib_feedback_config.domain.registry import Registry


def test_definitions_ignore_parent_and_default_to_none() -> None:
    registry = Registry()
    source = MappingSource(
        {
            "definition ringtone@ignored": {"long": "ringtone", "meeting": "ringtone_meeting"},
            "event ringtone": {"long": "not a definition"},
        }
    )
    assert parse_definitions(source, registry, DiagnosticCollector()) == 1
    assert registry.definitions == {"ringtone": Definition(long="ringtone", meeting="ringtone_meeting")}


def test_definition_collisions_keep_last() -> None:
    registry = Registry()
    source = MappingSource({"definition sms": {"long": "a"}, "definition sms@x": {"long": "b"}})
    parse_definitions(source, registry, DiagnosticCollector())
    assert registry.definitions["sms"].long == "b"


def test_definition_non_string_field_is_reported() -> None:
    registry = Registry()
    collector = DiagnosticCollector()
    parse_definitions(MappingSource({"definition sms": {"long": 5}}), registry, collector)
    assert registry.definitions["sms"].long is None
    assert [item.kind for item in collector] == [DiagnosticKind.FIELD_TYPE_MISMATCH]


def test_malformed_definition_header_is_skipped() -> None:
    registry = Registry()
    collector = DiagnosticCollector()
    assert parse_definitions(MappingSource({"definition ": {"long": "a"}}), registry, collector) == 0
    assert collector.of_kind(DiagnosticKind.MALFORMED_IDENTIFIER)


def test_general_defaults_when_group_missing() -> None:
    collector = DiagnosticCollector()
    assert parse_general(MappingSource({}), collector) == GeneralSettings()
    assert len(collector) == 0


def test_general_reads_every_field() -> None:
    source = MappingSource(
        {
            "general": {
                "plugins": "resource transform gst",
                "sound_search_path": "/usr/share/sounds",
                "vibration_search_path": "/usr/share/ngfd/haptics",
                "buffer_time": "200000",
                "latency_time": "100000",
                "system_volume": "0;60;100;extra",
            }
        }
    )
    settings = parse_general(source, DiagnosticCollector())
    assert settings == GeneralSettings(
        required_plugins=("resource", "transform", "gst"),
        sound_search_path="/usr/share/sounds",
        vibration_search_path="/usr/share/ngfd/haptics",
        buffer_time=200000,
        latency_time=100000,
        system_volume=(0, 60, 100),
    )


def test_general_malformed_values_keep_defaults() -> None:
    collector = DiagnosticCollector()
    settings = parse_general(
        MappingSource({"general": {"buffer_time": "fast", "system_volume": "0;60"}}), collector
    )
    assert settings.buffer_time == 0
    assert settings.system_volume == (0, 0, 0)
    assert [item.details["field"] for item in collector] == ["buffer_time", "system_volume"]


def test_general_partial_system_volume_applies_no_levels() -> None:
    collector = DiagnosticCollector()
    settings = parse_general(MappingSource({"general": {"system_volume": "10;20;loud"}}), collector)
    assert settings.system_volume == (0, 0, 0)
    assert [item.kind for item in collector] == [DiagnosticKind.FIELD_TYPE_MISMATCH]
