"""
Identifier field types. Ids are UUID strings held in canonical, lower-case
hyphenated form, the same form the store keys them by, so a record compares
equal to the one read back.

Values that do not parse are kept as given; rejecting them is left to the
storage layer's argument checks.
"""

import typing as t

import pydantic as p

import beacon.lib.uuid as uuid


def canonical_or_same(v: t.Any) -> t.Any:
    try:
        return uuid.canonical(v)
    except ValueError:
        return v


def id_set(v: t.Any) -> t.Any:
    """Ordered by canonical id, each id once."""
    if not isinstance(v, (list, tuple, set, frozenset)):
        return v
    return sorted({canonical_or_same(i) for i in v}, key=str)


ID = t.Annotated[str, p.BeforeValidator(canonical_or_same)]
IDSet = t.Annotated[list[str], p.BeforeValidator(id_set)]
