"""Public package surface for the feedback daemon settings resolver.

``load_settings`` finds and resolves the daemon's key file; ``resolve_settings``
does the same for an in-memory mapping. Both return a :class:`Registry`
holding the resolved events, definitions, interned resources, and the
diagnostics absorbed along the way.
"""

from __future__ import annotations

from .core import default_candidates, load_settings, load_source, resolve_settings
from .domain.diagnostics import Diagnostic, DiagnosticKind
from .domain.errors import (
    ConfigError,
    CyclicInheritanceError,
    InvalidFormat,
    InvalidReference,
    InvalidValue,
    NotFound,
    SourceLoadError,
)
from .domain.model import (
    Definition,
    EventDescriptor,
    FileSound,
    FileVibration,
    FixedVolume,
    GeneralSettings,
    GroupIdentifier,
    GroupKind,
    InternalVibration,
    LinearVolume,
    ProfileSound,
    ProfileVibration,
    ProfileVolume,
)
from .domain.registry import Registry
from .observability import bind_trace_id, get_logger

__all__ = [
    "ConfigError",
    "CyclicInheritanceError",
    "Definition",
    "Diagnostic",
    "DiagnosticKind",
    "EventDescriptor",
    "FileSound",
    "FileVibration",
    "FixedVolume",
    "GeneralSettings",
    "GroupIdentifier",
    "GroupKind",
    "InternalVibration",
    "InvalidFormat",
    "InvalidReference",
    "InvalidValue",
    "LinearVolume",
    "NotFound",
    "ProfileSound",
    "ProfileVibration",
    "ProfileVolume",
    "Registry",
    "SourceLoadError",
    "bind_trace_id",
    "default_candidates",
    "get_logger",
    "load_settings",
    "load_source",
    "resolve_settings",
]
