from __future__ import annotations

from pathlib import Path

import pytest

from lib_feedback_config import FixedVolume, load_settings
from lib_feedback_config.adapters.file_loaders.keyfile import KeyFileLoader, parse_keyfile, unescape
from lib_feedback_config.domain.errors import InvalidFormat, NotFound


def test_groups_keep_source_order_and_case(write_keyfile) -> None:
    path = write_keyfile(
        "# leading comment\n"
        "[general]\n"
        "Plugins = resource tonegen\n"
        "\n"
        "[event ringtone]\n"
        "sound=profile:ringing.alert.tone@general;filename:ring.wav\n"
        "[event ringtone_short@ringtone]\n"
        "max_timeout=5000\n"
    )
    data = KeyFileLoader().load(str(path))
    assert list(data) == ["general", "event ringtone", "event ringtone_short@ringtone"]
    assert data["general"] == {"Plugins": "resource tonegen"}
    assert data["event ringtone"]["sound"] == "profile:ringing.alert.tone@general;filename:ring.wav"


def test_semicolons_and_colons_survive() -> None:
    data = parse_keyfile("[event a]\nvolume=linear:10;80;3000\nled_pattern=Pattern:A\n")
    assert data["event a"] == {"volume": "linear:10;80;3000", "led_pattern": "Pattern:A"}


def test_repeated_groups_merge_and_last_key_wins() -> None:
    data = parse_keyfile("[event a]\nx=1\ny=2\n[event a]\nx=3\n")
    assert data == {"event a": {"x": "3", "y": "2"}}


def test_localized_keys_are_skipped() -> None:
    data = parse_keyfile("[event a]\nled_pattern=A\nled_pattern[fi]=B\n")
    assert data == {"event a": {"led_pattern": "A"}}


def test_no_interpolation() -> None:
    assert parse_keyfile("[general]\nsound_search_path=/usr/share/%(x)s\n")["general"]["sound_search_path"] == (
        "/usr/share/%(x)s"
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("plain", "plain"),
        (r"\sindent", " indent"),
        (r"a\nb", "a\nb"),
        (r"tab\there", "tab\there"),
        ("C:\\\\x", "C:\\x"),
        (r"\q", r"\q"),
        ("trailing\\", "trailing\\"),
    ],
)
def test_unescape(raw: str, expected: str) -> None:
    assert unescape(raw) == expected


def test_missing_file_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        KeyFileLoader().load(str(tmp_path / "absent.ini"))


def test_line_without_group_is_invalid(write_keyfile) -> None:
    path = write_keyfile("orphan=1\n[general]\n")
    with pytest.raises(InvalidFormat):
        KeyFileLoader().load(str(path))


def test_non_utf8_is_invalid(tmp_path: Path) -> None:
    path = tmp_path / "latin.ini"
    path.write_bytes(b"[general]\nplugins=\xff\n")
    with pytest.raises(InvalidFormat):
        KeyFileLoader().load(str(path))


def test_indented_lines_stand_on_their_own() -> None:
    data = parse_keyfile("[event a]\naudio_enabled=true\n  volume=fixed:80\n\t[event b]\n  led_enabled=1\n")
    assert data == {"event a": {"audio_enabled": "true", "volume": "fixed:80"}, "event b": {"led_enabled": "1"}}


def test_indented_key_file_resolves(write_keyfile) -> None:
    path = write_keyfile("[event a]\naudio_enabled=true\n    volume=fixed:80\n")
    registry = load_settings([str(path)])
    assert registry.events["a"].audio_enabled is True
    assert registry.events["a"].volume == FixedVolume(80)
    assert registry.diagnostics == []
