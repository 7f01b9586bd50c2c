"""Filesystem discovery of the daemon configuration file.

Purpose
-------
Implement the :class:`lib_feedback_config.application.ports.PathResolver`
protocol with the daemon's fixed search order: the system-wide file first,
then a file in the working directory. The ``/etc`` root can be redirected
through ``LIB_FEEDBACK_CONFIG_ETC`` for tests and relocated installs.

Contents
--------
* :data:`DEFAULT_SLUG` – directory and file stem used for the search.
* :class:`DefaultPathResolver` – yields the ordered candidate list.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping

from ...observability import log_debug

DEFAULT_SLUG = "ngf"
"""Stem of the configuration file (``/etc/ngf/ngf.ini``, ``./ngf.ini``)."""

ETC_OVERRIDE_ENV = "LIB_FEEDBACK_CONFIG_ETC"


class DefaultPathResolver:
    """Resolve candidate configuration files in priority order.

    Examples
    --------
    >>> resolver = DefaultPathResolver(cwd=Path("/srv/app"), env={"LIB_FEEDBACK_CONFIG_ETC": "/opt/etc"})
    >>> [Path(p).as_posix() for p in resolver.candidates()]
    ['/opt/etc/ngf/ngf.ini', '/srv/app/ngf.ini']
    """

    def __init__(
        self,
        *,
        slug: str = DEFAULT_SLUG,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Store the context required to build candidate paths.

        Parameters
        ----------
        slug:
            Directory name below ``/etc`` and file stem of the configuration.
        cwd:
            Directory searched for the local override file. Defaults to the
            process working directory.
        env:
            Optional environment mapping that overrides ``os.environ`` values
            (useful for deterministic tests).
        """

        self.slug = slug
        self.cwd = cwd or Path.cwd()
        self.env = {**os.environ, **(env or {})}

    def candidates(self) -> Iterable[str]:
        etc_root = Path(self.env.get(ETC_OVERRIDE_ENV, "/etc"))
        paths = [
            str(etc_root / self.slug / f"{self.slug}.ini"),
            str(self.cwd / f"{self.slug}.ini"),
        ]
        log_debug("path_candidates", group=None, path=None, count=len(paths))
        return paths
