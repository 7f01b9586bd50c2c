"""Definition groups: logical notification categories.

A definition group (``[definition ringtone]``) names the concrete events to
trigger for a category in its ``long``, ``short``, and ``meeting`` fields.
Definitions neither inherit nor receive defaults; a parent suffix in the
header is ignored.
"""

from __future__ import annotations

from ..domain.diagnostics import DiagnosticKind
from ..domain.errors import InvalidValue, NotFound
from ..domain.model import Definition, GroupKind
from ..domain.registry import Registry
from ..domain.schema import FieldKind
from ..observability import log_debug
from .diagnostics import DiagnosticCollector
from .identifiers import group_kind, parse_group_identifier
from .ports import ConfigSource

DEFINITION_FIELDS = ("long", "short", "meeting")


def parse_definitions(source: ConfigSource, registry: Registry, diagnostics: DiagnosticCollector) -> int:
    """Register every definition group of *source*; return how many were registered.

    Examples
    --------
    >>> from lib_feedback_config.adapters.sources.mapping import MappingSource
    >>> registry = Registry()
    >>> source = MappingSource({"definition sms": {"long": "sms", "short": "sms_short"}})
    >>> parse_definitions(source, registry, DiagnosticCollector())
    1
    >>> registry.definitions["sms"]
    Definition(long='sms', short='sms_short', meeting=None)
    """

    count = 0
    for group in source.groups():
        if group_kind(group) is not GroupKind.DEFINITION:
            continue
        identifier = parse_group_identifier(group)
        if identifier is None:
            diagnostics.report(DiagnosticKind.MALFORMED_IDENTIFIER, group, f"Skipping group {group!r}: no name")
            continue
        fields = {field: _optional_string(source, group, field, diagnostics) for field in DEFINITION_FIELDS}
        definition = Definition(**fields)
        registry.add_definition(identifier.name, definition)
        log_debug("definition_created", group=group, path=None, definition=identifier.name, **fields)
        count += 1
    return count


def _optional_string(source: ConfigSource, group: str, field: str, diagnostics: DiagnosticCollector) -> str | None:
    try:
        return source.get(group, field, FieldKind.STRING)  # type: ignore[return-value]
    except NotFound:
        return None
    except InvalidValue as exc:
        diagnostics.report(
            DiagnosticKind.FIELD_TYPE_MISMATCH,
            group,
            f"Invalid value for property {field}, expected string. Using default value None",
            field=field,
            raw=exc.raw,
            fallback=None,
        )
        return None
