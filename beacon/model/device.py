from __future__ import annotations

import pydantic as p

from .base import BaseModel


class IOSDevice(BaseModel):
    model_config = p.ConfigDict(frozen=True)

    device_token: str


class AndroidDevice(BaseModel):
    model_config = p.ConfigDict(frozen=True)

    registration_id: str


class MobileDevice(BaseModel):
    """A device registered to receive push notifications.

    Exactly one of the platform fields is expected to be set; the storage
    layer rejects devices that carry neither (or both).
    """

    model_config = p.ConfigDict(frozen=True)

    ios_device: IOSDevice | None = None
    android_device: AndroidDevice | None = None

    @classmethod
    def ios(cls, device_token: str) -> MobileDevice:
        return cls(ios_device=IOSDevice(device_token=device_token))

    @classmethod
    def android(cls, registration_id: str) -> MobileDevice:
        return cls(android_device=AndroidDevice(registration_id=registration_id))
