import importlib
import typing as t

__all__ = [
    "BeaconContainer",
    "BootConfiguration",
    "di",
    "LoggingProvider",
    "Settings",
    "Secrets",
    "TimestampProvider",
]


from . import di
from .config import Secrets, Settings
from .provider import LoggingProvider, TimestampProvider

if t.TYPE_CHECKING:
    from .container import BeaconContainer, BootConfiguration


# the containers import the storage layer, which itself imports from here, so
# they are only loaded on first use
def __getattr__(name: str) -> t.Any:
    if name in ("BeaconContainer", "BootConfiguration"):
        return getattr(importlib.import_module(f"{__name__}.container"), name)
    raise AttributeError(f"module {__name__} has no attribute {name}")
