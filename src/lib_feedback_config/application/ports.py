"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts adapters satisfy so the resolution pipeline
can run without depending on a concrete file format or filesystem layout.

Contents
--------
* :class:`ConfigSource` – ordered groups with typed field lookup.
* :class:`SourceLoader` – parses one configuration artifact into raw groups.
* :class:`PathResolver` – yields candidate configuration file locations.

System Role
-----------
These protocols keep the dependency arrow pointing inwards: adapters implement
them, :mod:`lib_feedback_config.application.driver` only consumes them.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence, runtime_checkable

from ..domain.schema import FieldKind, RawValue


@runtime_checkable
class ConfigSource(Protocol):
    """An already loaded, in-memory configuration source.

    Why
    ----
    The resolver reads dozens of fields per event; a typed ``get`` keeps type
    coercion rules in one adapter instead of scattering them.
    """

    def groups(self) -> Sequence[str]:
        """Return raw group headers in source order."""

    def get(self, group: str, field: str, kind: FieldKind) -> RawValue:
        """Return the value of *field* in *group* coerced to *kind*.

        Raises ``NotFound`` when the group or field is absent and
        ``InvalidValue`` when the raw value cannot be read as *kind*.
        """


@runtime_checkable
class SourceLoader(Protocol):
    """Parse a configuration artifact into ``group -> field -> raw value``."""

    def load(self, path: str) -> Mapping[str, Mapping[str, object]]:
        """Read *path*; raise ``NotFound`` when missing, ``InvalidFormat`` when malformed."""


@runtime_checkable
class PathResolver(Protocol):
    """Discover candidate configuration files in priority order."""

    def candidates(self) -> Iterable[str]:
        """Yield candidate paths; the first one that loads wins."""
