"""Shared fixtures for the ``lib_feedback_config`` test-suite.

The helpers mirror how the daemon sees configuration: a key file on disk, or
the ``group -> field -> raw value`` mapping every loader produces.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

import pytest

from lib_feedback_config.adapters.sources.mapping import MappingSource
from lib_feedback_config.application.identifiers import parse_group_identifier
from lib_feedback_config.domain.model import GroupIdentifier


@pytest.fixture()
def write_keyfile(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes key-file text and returns its path."""

    def _write(body: str, name: str = "ngf.ini") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _write


def event_index(groups: Mapping[str, Mapping[str, object]]) -> dict[str, tuple[str, GroupIdentifier]]:
    """Build the name -> (header, identifier) index the resolver consumes."""

    index: dict[str, tuple[str, GroupIdentifier]] = {}
    for raw in groups:
        identifier = parse_group_identifier(raw)
        if identifier is not None:
            index[identifier.name] = (raw, identifier)
    return index


class CountingSource(MappingSource):
    """``MappingSource`` that records how often each group was read."""

    def __init__(self, groups: Mapping[str, Mapping[str, object]]) -> None:
        super().__init__(groups)
        self.reads: dict[str, int] = {}

    def fields(self, group: str) -> Mapping[str, object]:
        self.reads[group] = self.reads.get(group, 0) + 1
        return super().fields(group)


@pytest.fixture()
def index_of() -> Callable[[Mapping[str, Mapping[str, object]]], dict[str, tuple[str, GroupIdentifier]]]:
    return event_index


@pytest.fixture()
def counting_source() -> type[CountingSource]:
    return CountingSource
