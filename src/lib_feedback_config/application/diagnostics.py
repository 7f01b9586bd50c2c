"""Collector that records absorbed conditions and logs them.

Every component that swallows a bad field, identifier, or reference reports it
here. The collector appends a :class:`Diagnostic` and emits the matching
structured log entry, so the log stream and the diagnostic list never drift
apart.
"""

from __future__ import annotations

from typing import Any, Iterator

from ..domain.diagnostics import Diagnostic, DiagnosticKind
from ..observability import log_warning


class DiagnosticCollector:
    """Ordered, append-only list of diagnostics for one resolution pass.

    Examples
    --------
    >>> collector = DiagnosticCollector()
    >>> _ = collector.report(DiagnosticKind.UNRESOLVED_PARENT, "event a@b", "parent b not found", parent="b")
    >>> [item.kind.value for item in collector]
    ['unresolved_parent']
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def report(self, kind: DiagnosticKind, group: str | None, message: str, **details: Any) -> Diagnostic:
        """Record and log one absorbed condition at warning level."""

        diagnostic = Diagnostic(kind, group, message, details)
        self._items.append(diagnostic)
        log_warning(kind.value, group=group, path=None, detail=message, **details)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [item for item in self._items if item.kind is kind]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
