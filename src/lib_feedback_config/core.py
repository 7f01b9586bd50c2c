"""Composition root for ``lib_feedback_config``.

Purpose
-------
Provide the entry points that find the configuration file, load it with the
right adapter, and run the resolution driver over it. This module wires
adapters to the application layer and exports only stable, consumer-ready
APIs.

Contents
--------
* :data:`_FILE_LOADERS` – mapping of file suffixes to loader instances.
* :func:`load_settings` – high-level API returning a populated
  :class:`Registry`.
* :func:`load_source` – tries candidate files in order and returns the first
  that loads.
* :func:`resolve_settings` – resolves an in-memory ``group -> fields`` mapping.
* :func:`default_candidates` – the daemon's fixed search list.

System Role
-----------
The only place that decides which files are tried and in which order. A
missing or malformed candidate is skipped; running out of candidates raises
:class:`SourceLoadError`, the single fatal outcome of a resolution pass.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from .adapters.file_loaders.keyfile import KeyFileLoader
from .adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from .adapters.path_resolvers.default import DEFAULT_SLUG, DefaultPathResolver
from .adapters.sources.mapping import MappingSource
from .application.driver import resolve_source
from .application.ports import SourceLoader
from .domain.errors import InvalidFormat, NotFound, SourceLoadError
from .domain.registry import Registry
from .observability import bind_trace_id, log_debug, log_error, log_info, make_event

# Loaders keyed by suffix. Anything not listed is read as a key file, the
# daemon's native format.
_KEYFILE_LOADER = KeyFileLoader()
_FILE_LOADERS: Mapping[str, SourceLoader] = {
    ".ini": _KEYFILE_LOADER,
    ".conf": _KEYFILE_LOADER,
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def default_candidates(*, cwd: Path | None = None, env: Mapping[str, str] | None = None) -> list[str]:
    """Return the fixed candidate list: ``/etc/ngf/ngf.ini`` then ``./ngf.ini``.

    Examples
    --------
    >>> [Path(p).name for p in default_candidates(cwd=Path("/tmp"))]
    ['ngf.ini', 'ngf.ini']
    """

    return list(DefaultPathResolver(slug=DEFAULT_SLUG, cwd=cwd, env=env).candidates())


def load_settings(
    candidates: Iterable[str] | None = None,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Registry:
    """Load the first usable configuration file and resolve it.

    Parameters
    ----------
    candidates:
        Paths to try in order. Defaults to :func:`default_candidates`.
    cwd / env:
        Forwarded to :func:`default_candidates` when *candidates* is omitted.

    Returns
    -------
    Registry
        Resolved events, definitions, interned references, general settings,
        and diagnostics.

    Raises
    ------
    SourceLoadError
        When none of the candidates could be loaded.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> path = Path(tmp.name) / "ngf.ini"
    >>> _ = path.write_text("[event ringtone]\\naudio_enabled=true\\n", encoding="utf-8")
    >>> load_settings([str(path)]).events["ringtone"].audio_enabled
    True
    >>> tmp.cleanup()
    """

    bind_trace_id(None)
    paths = list(candidates) if candidates is not None else default_candidates(cwd=cwd, env=env)
    source = load_source(paths)
    return resolve_source(source)


def load_source(candidates: Iterable[str]) -> MappingSource:
    """Return a :class:`MappingSource` for the first candidate that loads.

    Missing files are skipped silently, malformed ones are logged and skipped.
    """

    tried: list[str] = []
    for path in candidates:
        tried.append(path)
        loader = _FILE_LOADERS.get(Path(path).suffix.lower(), _KEYFILE_LOADER)
        try:
            groups = loader.load(path)
        except NotFound:
            log_debug("source_missing", **make_event(None, path))
            continue
        except InvalidFormat as exc:
            log_error("source_invalid", **make_event(None, path, {"error": str(exc)}))
            continue
        log_info("source_loaded", **make_event(None, path, {"groups": len(groups)}))
        return MappingSource(groups, origin=path)
    raise SourceLoadError(tried)


def resolve_settings(groups: Mapping[str, Mapping[str, object]]) -> Registry:
    """Resolve an in-memory ``group -> field -> value`` mapping.

    Examples
    --------
    >>> registry = resolve_settings({"definition sms": {"long": "sms"}})
    >>> registry.definitions["sms"].long
    'sms'
    """

    return resolve_source(MappingSource(groups))


__all__ = [
    "default_candidates",
    "load_settings",
    "load_source",
    "resolve_settings",
]
