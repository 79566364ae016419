__all__ = [
    "BeaconContainer",
    "BootConfiguration",
    "StorageContainer",
]

from .beacon import BeaconContainer, BootConfiguration
from .storage import StorageContainer
