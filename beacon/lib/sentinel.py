from __future__ import annotations

import typing as t


class Sentinel(object):
    """Base for singleton marker values; each subclass has exactly one instance."""

    _instances: t.ClassVar[dict[type, Sentinel]] = {}

    def __new__(cls) -> t.Self:
        if cls not in Sentinel._instances:
            Sentinel._instances[cls] = super().__new__(cls)
        return t.cast(t.Self, Sentinel._instances[cls])

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    def __bool__(self) -> bool:
        return False


class NotReady(Sentinel):
    """A provider value that is only known after the container has booted."""
