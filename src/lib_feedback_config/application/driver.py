"""Resolution driver: one pass over a loaded configuration source.

Purpose
-------
Orchestrate the general-settings parser, the definition parser, the property
resolver, and the event materializer over a single :class:`ConfigSource`, and
hand the resulting :class:`Registry` to the caller.

System Role
-----------
Called by :func:`lib_feedback_config.core.load_settings` once a source has been
loaded, and directly by tests and tooling with in-memory sources. The
transient event index and the resolved property sets live only for the
duration of :func:`resolve_source`.
"""

from __future__ import annotations

from ..domain.diagnostics import DiagnosticKind
from ..domain.errors import CyclicInheritanceError
from ..domain.model import GroupIdentifier, GroupKind
from ..domain.registry import Registry
from ..observability import log_info
from .definitions import parse_definitions
from .diagnostics import DiagnosticCollector
from .general import parse_general
from .identifiers import group_kind, parse_group_identifier
from .materialize import materialize_event
from .ports import ConfigSource
from .references import ReferenceParser
from .resolver import PropertyResolver


def resolve_source(source: ConfigSource) -> Registry:
    """Resolve every definition and event of *source* into a new registry.

    Per-group and per-field problems never abort the pass; they end up in
    ``registry.diagnostics`` and in the log.

    Examples
    --------
    >>> from lib_feedback_config.adapters.sources.mapping import MappingSource
    >>> source = MappingSource({
    ...     "event base": {"audio_enabled": "true", "volume": "fixed:80"},
    ...     "event sms@base": {"max_timeout": "10"},
    ... })
    >>> registry = resolve_source(source)
    >>> registry.events["sms"].audio_enabled, registry.events["sms"].volume
    (True, FixedVolume(level=80))
    >>> registry.events["sms"].volume is registry.events["base"].volume
    True
    """

    diagnostics = DiagnosticCollector()
    registry = Registry()

    registry.general = parse_general(source, diagnostics)
    parse_definitions(source, registry, diagnostics)

    index = _index_events(source, diagnostics)
    resolver = PropertyResolver(source, index, diagnostics)
    for name in index:
        try:
            resolver.resolve(name)
        except CyclicInheritanceError as exc:
            diagnostics.report(
                DiagnosticKind.CYCLIC_INHERITANCE,
                index[name][0],
                f"Skipping event {name!r}: {exc}",
                chain=list(exc.chain),
            )

    references = ReferenceParser(
        registry,
        diagnostics,
        sound_search_path=registry.general.sound_search_path,
        vibration_search_path=registry.general.vibration_search_path,
    )
    for name, props in resolver.resolved.items():
        materialize_event(name, props, registry, references, group=index[name][0])

    registry.diagnostics = list(diagnostics)
    log_info(
        "configuration_resolved",
        group=None,
        path=getattr(source, "origin", None),
        events=len(registry.events),
        definitions=len(registry.definitions),
        diagnostics=len(registry.diagnostics),
    )
    return registry


def _index_events(source: ConfigSource, diagnostics: DiagnosticCollector) -> dict[str, tuple[str, GroupIdentifier]]:
    """Map event names to their raw group header and parsed identifier.

    A later group with the same name replaces an earlier one.
    """

    index: dict[str, tuple[str, GroupIdentifier]] = {}
    for group in source.groups():
        if group_kind(group) is not GroupKind.EVENT:
            continue
        identifier = parse_group_identifier(group)
        if identifier is None:
            diagnostics.report(DiagnosticKind.MALFORMED_IDENTIFIER, group, f"Skipping group {group!r}: no name")
            continue
        index[identifier.name] = (group, identifier)
    return index
