"""Structured records for conditions a resolution pass absorbs.

A malformed field never aborts resolution; instead one :class:`Diagnostic` is
recorded so callers and tests can see exactly what was skipped or defaulted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class DiagnosticKind(str, Enum):
    FIELD_TYPE_MISMATCH = "field_type_mismatch"
    MALFORMED_IDENTIFIER = "malformed_identifier"
    MALFORMED_REFERENCE = "malformed_reference"
    UNRESOLVED_PARENT = "unresolved_parent"
    CYCLIC_INHERITANCE = "cyclic_inheritance"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One absorbed condition.

    Attributes
    ----------
    kind:
        Category of the condition.
    group:
        Raw group header the condition was found in, when known.
    message:
        Human readable summary, identical to the logged message.
    details:
        Extra structured fields (field name, raw value, fallback, ...).
    """

    kind: DiagnosticKind
    group: str | None
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "group": self.group, "message": self.message, **self.details}
