"""Group header parsing.

Every group in the configuration source is named ``"<tag> <name>[@<parent>]"``
where ``<tag>`` is one of the :class:`GroupKind` values. The bare ``general``
group carries no name at all.
"""

from __future__ import annotations

from ..domain.model import GroupIdentifier, GroupKind

_TAGS = {kind.value: kind for kind in GroupKind}


def group_kind(raw: str) -> GroupKind | None:
    """Classify *raw* by its leading tag token.

    Examples
    --------
    >>> group_kind("event ringtone@base")
    <GroupKind.EVENT: 'event'>
    >>> group_kind("general")
    <GroupKind.GENERAL: 'general'>
    >>> group_kind("events ringtone") is None
    True
    """

    tag, _, _ = raw.partition(" ")
    return _TAGS.get(tag)


def parse_group_identifier(raw: str) -> GroupIdentifier | None:
    """Split *raw* into kind, name, and optional parent.

    Everything after the first space is the identifier; it is split once on
    ``@``. There is no escaping, so names can never contain ``@``. Both parts
    are stripped of surrounding whitespace; an empty parent (``"event a@"``)
    is read as no parent.

    Returns ``None`` when the tag is unknown or no name follows it.

    Examples
    --------
    >>> parse_group_identifier("event foo@bar")
    GroupIdentifier(kind=<GroupKind.EVENT: 'event'>, name='foo', parent='bar')
    >>> parse_group_identifier("event foo")
    GroupIdentifier(kind=<GroupKind.EVENT: 'event'>, name='foo', parent=None)
    >>> parse_group_identifier("event ") is None
    True
    """

    tag, separator, remainder = raw.partition(" ")
    kind = _TAGS.get(tag)
    if kind is None or not separator or not remainder:
        return None
    name, _, parent = remainder.partition("@")
    name, parent = name.strip(), parent.strip()
    if not name:
        return None
    return GroupIdentifier(kind, name, parent or None)
