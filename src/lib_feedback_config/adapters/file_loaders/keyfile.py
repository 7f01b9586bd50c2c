"""Key-file (``.ini``) loader for the daemon's native configuration format.

Purpose
-------
Read the desktop-style key-file dialect the daemon ships its settings in:
``[group]`` headers, ``key=value`` lines, ``#`` comments, case-sensitive keys,
and backslash escapes in values. Parsing is delegated to :mod:`configparser`
configured to match that dialect; values stay raw strings and are typed later
by :class:`lib_feedback_config.adapters.sources.mapping.MappingSource`.

Contents
--------
* :class:`KeyFileLoader` – file adapter.
* :func:`parse_keyfile` – text-level parser shared with tests and tooling.
* :func:`unescape` – decodes ``\\s``, ``\\n``, ``\\t``, ``\\r`` and ``\\\\``.
"""

from __future__ import annotations

import configparser
import re

from .structured import BaseFileLoader

_LOCALIZED_KEY = re.compile(r".+\[[^\]]+\]")
_ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}
_NO_DEFAULT_SECTION = "\x00"


class KeyFileLoader(BaseFileLoader):
    """Load key-file documents into ``group -> field -> string`` mappings.

    Examples
    --------
    >>> from pathlib import Path
    >>> from tempfile import NamedTemporaryFile
    >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8', suffix='.ini')
    >>> _ = tmp.write('[event sms@base]\\nsound=profile:sms.alert.tone@general\\n')
    >>> tmp.close()
    >>> KeyFileLoader().load(tmp.name)["event sms@base"]["sound"]
    'profile:sms.alert.tone@general'
    >>> Path(tmp.name).unlink()
    """

    format_name = "key file"

    def _decode(self, payload: bytes, path: str) -> object:
        return parse_keyfile(payload.decode("utf-8"), source=path)

    def _decode_errors(self) -> tuple[type[Exception], ...]:
        return (configparser.Error, UnicodeDecodeError)


def parse_keyfile(text: str, *, source: str = "<string>") -> dict[str, dict[str, str]]:
    """Parse key-file *text* preserving group order.

    Repeated groups are merged and repeated keys keep the last value, as the
    daemon's own loader does. Localised keys (``name[fi]``) are skipped.
    Leading whitespace is insignificant: every line stands on its own, so an
    indented line never continues the previous value.

    Examples
    --------
    >>> parse_keyfile("[general]\\nplugins=tonegen vibrator\\n# comment\\n[event a]\\nvolume=fixed:80\\n")
    {'general': {'plugins': 'tonegen vibrator'}, 'event a': {'volume': 'fixed:80'}}
    """

    parser = configparser.ConfigParser(
        interpolation=None,
        delimiters=("=",),
        comment_prefixes=("#",),
        inline_comment_prefixes=None,
        strict=False,
        empty_lines_in_values=False,
        default_section=_NO_DEFAULT_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    # no continuation lines in key files
    parser.read_string("\n".join(line.lstrip() for line in text.splitlines()), source=source)
    groups: dict[str, dict[str, str]] = {}
    for group in parser.sections():
        groups[group] = {
            key: unescape(value)
            for key, value in parser.items(group, raw=True)
            if not _LOCALIZED_KEY.fullmatch(key)
        }
    return groups


def unescape(value: str) -> str:
    """Decode key-file escape sequences in *value*; unknown escapes are kept.

    Examples
    --------
    >>> unescape(r"\\sleading space")
    ' leading space'
    >>> unescape(r"C:\\\\sounds")
    'C:\\\\sounds'
    """

    if "\\" not in value:
        return value
    out: list[str] = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        escaped = next(chars, "")
        out.append(_ESCAPES.get(escaped, "\\" + escaped))
    return "".join(out)
