from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_feedback_config.domain.errors import InvalidValue
from lib_feedback_config.domain.schema import EVENT_SCHEMA, SCHEMA_BY_NAME, FieldKind, PropertyValue, coerce


def test_schema_names_are_unique_and_indexed() -> None:
    names = [spec.name for spec in EVENT_SCHEMA]
    assert len(names) == len(set(names))
    assert list(SCHEMA_BY_NAME) == names


def test_schema_defaults_match_their_kind() -> None:
    for spec in EVENT_SCHEMA:
        assert spec.kind.accepts(spec.default), spec.name


def test_tone_generator_pattern_defaults_to_minus_one() -> None:
    assert SCHEMA_BY_NAME["audio_tonegen_pattern"].default == -1
    assert SCHEMA_BY_NAME["sound"].default is None
    assert SCHEMA_BY_NAME["max_timeout"].default == 0


@pytest.mark.parametrize(
    ("raw", "kind", "expected"),
    [
        ("42", FieldKind.INT, 42),
        ("-7", FieldKind.INT, -7),
        (" +3 ", FieldKind.INT, 3),
        (12, FieldKind.INT, 12),
        ("true", FieldKind.BOOL, True),
        ("FALSE", FieldKind.BOOL, False),
        ("1", FieldKind.BOOL, True),
        ("0", FieldKind.BOOL, False),
        (True, FieldKind.BOOL, True),
        ("profile:a@b", FieldKind.STRING, "profile:a@b"),
        ("", FieldKind.STRING, ""),
    ],
)
def test_coerce_accepts_well_typed_values(raw: object, kind: FieldKind, expected: object) -> None:
    assert coerce(raw, kind, field="demo") == expected


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        ("abc", FieldKind.INT),
        ("1.5", FieldKind.INT),
        ("", FieldKind.INT),
        (True, FieldKind.INT),
        (2.0, FieldKind.INT),
        ("yes", FieldKind.BOOL),
        (1, FieldKind.BOOL),
        (5, FieldKind.STRING),
        (None, FieldKind.STRING),
    ],
)
def test_coerce_rejects_mismatched_values(raw: object, kind: FieldKind) -> None:
    with pytest.raises(InvalidValue) as excinfo:
        coerce(raw, kind, field="demo")
    assert excinfo.value.field == "demo"
    assert excinfo.value.raw == raw


def test_property_value_rejects_wrong_kind() -> None:
    with pytest.raises(TypeError):
        PropertyValue(FieldKind.BOOL, 1)
    assert PropertyValue(FieldKind.STRING, None).value is None


@given(st.integers())
def test_integer_strings_round_trip(number: int) -> None:
    assert coerce(str(number), FieldKind.INT, field="max_timeout") == number
