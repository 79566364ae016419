"""UUID helpers backed by uuid_utils; identifiers travel as canonical strings."""

from __future__ import annotations

import typing as t

import uuid_utils

UUID = uuid_utils.UUID


def uuid4() -> UUID:
    return uuid_utils.uuid4()


def parse(s: t.Any) -> UUID:
    """Parse a textual UUID, raising ValueError for anything malformed."""
    if not isinstance(s, str):
        raise ValueError(f"expected a UUID string, got {type(s).__name__}")
    try:
        return UUID(s.strip())
    except (TypeError, ValueError) as ex:
        raise ValueError(f"badly formed UUID: {s!r}") from ex


def canonical(s: t.Any) -> str:
    """Lower-case hyphenated form of a textual UUID."""
    return str(parse(s))
