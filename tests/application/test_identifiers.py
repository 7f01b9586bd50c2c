from __future__ import annotations

import string

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_feedback_config.application.identifiers import group_kind, parse_group_identifier
from lib_feedback_config.domain.model import GroupIdentifier, GroupKind

TOKEN = st.text(alphabet=string.ascii_letters + string.digits + "._-", min_size=1, max_size=12)


def test_event_with_parent() -> None:
    assert parse_group_identifier("event foo@bar") == GroupIdentifier(GroupKind.EVENT, "foo", "bar")


def test_event_without_parent() -> None:
    assert parse_group_identifier("event foo") == GroupIdentifier(GroupKind.EVENT, "foo", None)


@pytest.mark.parametrize("raw", ["event ", "event", "event @bar", "general", "unknown foo", ""])
def test_malformed_headers_yield_none(raw: str) -> None:
    assert parse_group_identifier(raw) is None


def test_empty_parent_is_no_parent() -> None:
    assert parse_group_identifier("event foo@") == GroupIdentifier(GroupKind.EVENT, "foo", None)


def test_second_at_sign_stays_in_parent() -> None:
    identifier = parse_group_identifier("event a@b@c")
    assert identifier is not None
    assert (identifier.name, identifier.parent) == ("a", "b@c")


def test_definition_and_vibra_tags() -> None:
    assert parse_group_identifier("definition ringtone").kind is GroupKind.DEFINITION  # type: ignore[union-attr]
    assert parse_group_identifier("vibra ffmemless").kind is GroupKind.VIBRATOR  # type: ignore[union-attr]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("general", GroupKind.GENERAL),
        ("event a", GroupKind.EVENT),
        ("definition a", GroupKind.DEFINITION),
        ("vibra a", GroupKind.VIBRATOR),
        ("events a", None),
    ],
)
def test_group_kind(raw: str, expected: GroupKind | None) -> None:
    assert group_kind(raw) is expected


@given(TOKEN, st.one_of(st.none(), TOKEN))
def test_headers_round_trip(name: str, parent: str | None) -> None:
    raw = f"event {name}" if parent is None else f"event {name}@{parent}"
    assert parse_group_identifier(raw) == GroupIdentifier(GroupKind.EVENT, name, parent)
