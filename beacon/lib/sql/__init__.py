__all__ = [
    "DebugQuery",
    "DebugSession",
]

from .session import DebugQuery, DebugSession
