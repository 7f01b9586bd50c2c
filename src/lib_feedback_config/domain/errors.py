"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the resolution pipeline,
and consuming applications. The hierarchy lives in the domain layer so outer
layers may depend on it without the domain importing anything back.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration-related
  issues.
* :class:`InvalidFormat` – parsing problems while reading a configuration
  source.
* :class:`InvalidValue` – a field exists but does not match its schema kind.
* :class:`InvalidReference` – a resource reference entry is malformed.
* :class:`NotFound` – an expected file, group, or field is missing.
* :class:`SourceLoadError` – no candidate configuration source could be loaded.
* :class:`CyclicInheritanceError` – an event inherits from itself, directly or
  through a chain of parents.

System Role
-----------
Only :class:`SourceLoadError` escapes :func:`lib_feedback_config.core.load_settings`.
Every other error is raised by a small component and absorbed one level up,
where it is turned into a diagnostic entry.
"""

from __future__ import annotations

from typing import Sequence


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_feedback_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidFormat(ConfigError):
    """Raised when an input artifact cannot be parsed into structured data.

    Typical Sources
    ---------------
    The key-file loader (:mod:`configparser`) and the structured loaders
    (:mod:`tomllib`, :mod:`json`, :mod:`yaml`).
    """


class InvalidValue(InvalidFormat):
    """Raised when a field value does not match the kind its schema expects.

    Attributes
    ----------
    field:
        Name of the offending field.
    raw:
        The raw value as found in the source.
    """

    def __init__(self, message: str, *, field: str, raw: object) -> None:
        super().__init__(message)
        self.field = field
        self.raw = raw


class InvalidReference(InvalidFormat):
    """Raised when a resource reference entry does not match its grammar.

    Covers unknown prefixes, empty or non-integer payloads, profile payloads
    without a key, and file names that cannot be found.
    """


class NotFound(ConfigError):
    """Represents missing-but-optional resources (files, groups, fields).

    Why
    ----
    Allow adapters to signal absence without aborting the resolution pass.
    """


class SourceLoadError(ConfigError):
    """Raised when none of the candidate configuration sources could be loaded.

    This is the only fatal outcome of a resolution pass.

    Attributes
    ----------
    candidates:
        Paths that were tried, in order.
    """

    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = tuple(candidates)
        listed = ", ".join(self.candidates) or "<none>"
        super().__init__(f"No configuration source could be loaded (tried: {listed})")


class CyclicInheritanceError(ConfigError):
    """Raised when an event's parent chain loops back onto itself.

    Attributes
    ----------
    chain:
        Event names from the first repeated name back to itself, e.g.
        ``("a", "b", "a")``.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__("Cyclic inheritance: " + " -> ".join(self.chain))
