"""Structured configuration file loaders.

Purpose
-------
Convert TOML, JSON, and YAML documents into the ``group -> field -> value``
mapping the resolver consumes. Each top-level key is a group header (for
example ``"event ringtone@base"``) and must map to a table of scalar fields,
the same shape a key file produces.

Contents
--------
* :class:`BaseFileLoader` – reads the file, runs the format decoder, validates
  the group tables, and logs the outcome.
* :class:`TOMLFileLoader`, :class:`JSONFileLoader`, :class:`YAMLFileLoader` –
  decoders for the individual formats. YAML needs PyYAML.

System Role
-----------
Invoked by :func:`lib_feedback_config.core.load_source` for candidates with a
``.toml``, ``.json``, ``.yaml`` or ``.yml`` suffix. The key-file loader builds
on the same base class.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import ClassVar, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[assignment]

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error

try:
    import yaml  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]

_SCALARS = (str, int, float, bool, type(None))


class BaseFileLoader:
    """Template for loaders: read bytes, decode, validate groups.

    Subclasses set :attr:`format_name` and implement :meth:`_decode`; the
    exceptions listed by :meth:`_decode_errors` become :class:`InvalidFormat`.
    """

    format_name: ClassVar[str] = "document"

    def load(self, path: str) -> Mapping[str, Mapping[str, object]]:
        """Return the group tables of *path*.

        Raises
        ------
        NotFound
            When *path* is not a file.
        InvalidFormat
            When the document cannot be decoded or is not a mapping of tables.
        """

        payload = self._read(path)
        try:
            data = self._decode(payload, path)
        except self._decode_errors() as exc:
            log_error("config_file_invalid", group=None, path=path, format=self.format_name, error=str(exc))
            raise InvalidFormat(f"Invalid {self.format_name} in {path}: {exc}") from exc
        groups = self._ensure_groups(data, path=path)
        log_debug("config_file_loaded", group=None, path=path, format=self.format_name, groups=len(groups))
        return groups

    def _decode(self, payload: bytes, path: str) -> object:
        raise NotImplementedError

    def _decode_errors(self) -> tuple[type[Exception], ...]:
        return (UnicodeDecodeError,)

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"[general]")
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)[:4]
        b'[gen'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", group=None, path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_groups(data: object, *, path: str) -> Mapping[str, Mapping[str, object]]:
        """Ensure *data* maps group headers to tables of scalar fields.

        Examples
        --------
        >>> BaseFileLoader._ensure_groups({"event a": {"audio_enabled": True}}, path="demo")
        {'event a': {'audio_enabled': True}}
        >>> BaseFileLoader._ensure_groups({"event a": 1}, path="demo")
        Traceback (most recent call last):
        ...
        lib_feedback_config.domain.errors.InvalidFormat: Group 'event a' in demo is not a table
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        for group, fields in data.items():
            if not isinstance(fields, Mapping):
                raise InvalidFormat(f"Group {group!r} in {path} is not a table")
            for key, value in fields.items():
                if not isinstance(value, _SCALARS):
                    raise InvalidFormat(f"Field {key!r} of group {group!r} in {path} is not a scalar")
        return data  # type: ignore[return-value]


class TOMLFileLoader(BaseFileLoader):
    """TOML documents; quoted table names carry the group headers.

    Examples
    --------
    >>> from tempfile import NamedTemporaryFile
    >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8', suffix='.toml')
    >>> _ = tmp.write('["event ringtone"]\\naudio_enabled = true\\n')
    >>> tmp.close()
    >>> TOMLFileLoader().load(tmp.name)["event ringtone"]["audio_enabled"]
    True
    >>> Path(tmp.name).unlink()
    """

    format_name = "TOML"

    def _decode(self, payload: bytes, path: str) -> object:
        return tomllib.loads(payload.decode("utf-8"))

    def _decode_errors(self) -> tuple[type[Exception], ...]:
        return (tomllib.TOMLDecodeError, UnicodeDecodeError)


class JSONFileLoader(BaseFileLoader):
    format_name = "JSON"

    def _decode(self, payload: bytes, path: str) -> object:
        return json.loads(payload)

    def _decode_errors(self) -> tuple[type[Exception], ...]:
        return (json.JSONDecodeError, UnicodeDecodeError)


class YAMLFileLoader(BaseFileLoader):
    """YAML documents; an empty document has no groups.

    Raises :class:`NotFound` when PyYAML is not installed.
    """

    format_name = "YAML"

    def _decode(self, payload: bytes, path: str) -> object:
        if yaml is None:
            raise NotFound("PyYAML is required for YAML configuration support")
        data = yaml.safe_load(payload)
        return {} if data is None else data

    def _decode_errors(self) -> tuple[type[Exception], ...]:
        if yaml is None:
            return (UnicodeDecodeError,)
        return (yaml.YAMLError, UnicodeDecodeError)
