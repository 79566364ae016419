"""
Repositories over the relational store. Submodules are imported on first
attribute access, so `import beacon.storage` stays cheap for the container.
"""

import importlib
import types
import typing as t

Repositories = ("credential", "follower", "inbox", "message", "organization", "preferences")

__all__ = list(Repositories)

if t.TYPE_CHECKING:
    from . import credential, follower, inbox, message, organization, preferences


def __getattr__(name: str) -> types.ModuleType:
    if name not in Repositories:
        raise AttributeError(f"module {__name__} has no attribute {name}")
    module = importlib.import_module(f"{__name__}.{name}")
    globals()[name] = module
    return module
