"""Inheritance-aware property resolution for event groups.

Purpose
-------
Compute the merged :class:`PropertySet` of an event by walking its parent
chain depth-first. The merge itself works like layered configuration: the
parent's resolved set is the lower layer and the event's own fields are laid
on top.

Default policy
--------------
* A **base** event (no parent) receives the schema default for every field it
  does not set, or sets with the wrong type.
* A **derived** event only carries the fields it sets correctly; everything
  else comes from the parent's resolved set.

So a derived event that says nothing about ``audio_enabled`` inherits the
parent's value instead of falling back to the schema default.

Contents
--------
* :class:`ResolutionState` – per-name state machine.
* :class:`PropertyResolver` – memoizing resolver with a cycle guard.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from ..domain.diagnostics import DiagnosticKind
from ..domain.errors import CyclicInheritanceError, InvalidValue, NotFound
from ..domain.model import GroupIdentifier
from ..domain.properties import PropertySet
from ..domain.schema import EVENT_SCHEMA, FieldSpec, PropertyValue
from .diagnostics import DiagnosticCollector
from .ports import ConfigSource


class ResolutionState(str, Enum):
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAILED = "failed"


class PropertyResolver:
    """Resolve and memoize the property sets of the events in *index*.

    Parameters
    ----------
    source:
        Configuration source the raw fields are read from.
    index:
        Event name to ``(raw group header, parsed identifier)``.
    diagnostics:
        Channel receiving absorbed conditions.

    Examples
    --------
    >>> from lib_feedback_config.adapters.sources.mapping import MappingSource
    >>> from lib_feedback_config.application.identifiers import parse_group_identifier
    >>> groups = {"event base": {"audio_enabled": "true"}, "event child@base": {"max_timeout": "5"}}
    >>> index = {parse_group_identifier(raw).name: (raw, parse_group_identifier(raw)) for raw in groups}
    >>> resolver = PropertyResolver(MappingSource(groups), index, DiagnosticCollector())
    >>> child = resolver.resolve("child")
    >>> child.value("audio_enabled"), child.value("max_timeout"), child.origin("audio_enabled")
    (True, 5, 'base')
    """

    def __init__(
        self,
        source: ConfigSource,
        index: Mapping[str, tuple[str, GroupIdentifier]],
        diagnostics: DiagnosticCollector,
    ) -> None:
        self._source = source
        self._index = index
        self._diagnostics = diagnostics
        self._states: dict[str, ResolutionState] = {}
        self._resolved: dict[str, PropertySet] = {}
        self._stack: list[str] = []
        self._failures: dict[str, tuple[str, ...]] = {}

    @property
    def resolved(self) -> Mapping[str, PropertySet]:
        """Completed property sets in the order they finished."""

        return self._resolved

    def state(self, name: str) -> ResolutionState:
        return self._states.get(name, ResolutionState.UNVISITED)

    def resolve(self, name: str) -> PropertySet | None:
        """Return the merged property set of *name*.

        Returns ``None`` when no event group is named *name*.

        Raises
        ------
        CyclicInheritanceError
            When *name* (or one of its ancestors) inherits from itself.
        """

        state = self.state(name)
        if state is ResolutionState.DONE:
            return self._resolved[name]
        if state is ResolutionState.IN_PROGRESS:
            start = self._stack.index(name)
            raise CyclicInheritanceError([*self._stack[start:], name])
        if state is ResolutionState.FAILED:
            raise CyclicInheritanceError(self._failures[name])

        entry = self._index.get(name)
        if entry is None:
            return None
        group, identifier = entry

        self._states[name] = ResolutionState.IN_PROGRESS
        self._stack.append(name)
        try:
            parent_props = self._resolve_parent(group, identifier)
        except CyclicInheritanceError as exc:
            self._states[name] = ResolutionState.FAILED
            self._failures[name] = exc.chain
            raise
        finally:
            self._stack.pop()

        own = self._read_fields(name, group, set_defaults=parent_props is None)
        merged = own if parent_props is None else parent_props.overlay(own)
        self._resolved[name] = merged
        self._states[name] = ResolutionState.DONE
        return merged

    def _resolve_parent(self, group: str, identifier: GroupIdentifier) -> PropertySet | None:
        """Resolve the parent first; ``None`` means the event is treated as a base."""

        if identifier.is_base:
            return None
        parent = self.resolve(identifier.parent)
        if parent is None:
            self._diagnostics.report(
                DiagnosticKind.UNRESOLVED_PARENT,
                group,
                f"Parent event {identifier.parent!r} of {identifier.name!r} does not exist; using defaults",
                parent=identifier.parent,
            )
        return parent

    def _read_fields(self, name: str, group: str, *, set_defaults: bool) -> PropertySet:
        values: dict[str, PropertyValue] = {}
        origins: dict[str, str | None] = {}
        for spec in EVENT_SCHEMA:
            try:
                raw = self._source.get(group, spec.name, spec.kind)
            except NotFound:
                pass
            except InvalidValue as exc:
                self._report_mismatch(group, spec, exc, set_defaults=set_defaults)
            else:
                values[spec.name] = PropertyValue(spec.kind, raw)
                origins[spec.name] = name
                continue
            if set_defaults:
                values[spec.name] = spec.default_value()
                origins[spec.name] = None
        return PropertySet(values, origins)

    def _report_mismatch(self, group: str, spec: FieldSpec, exc: InvalidValue, *, set_defaults: bool) -> None:
        fallback = f"default value {spec.default!r}" if set_defaults else "inherited value"
        self._diagnostics.report(
            DiagnosticKind.FIELD_TYPE_MISMATCH,
            group,
            f"Invalid value for property {spec.name}, expected {spec.kind.value}. Using {fallback}",
            field=spec.name,
            raw=exc.raw,
            fallback=spec.default if set_defaults else None,
        )
