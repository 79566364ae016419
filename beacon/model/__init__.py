__all__ = [
    # Base
    "BaseModel",
    # Identifiers
    "ID",
    "IDSet",
    # Enums
    "DeploymentEnvironment",
    "Tier",
    # Organization
    "Industry",
    "Organization",
    # User
    "Role",
    "User",
    # Application
    "Application",
    "ProgrammingLanguage",
    # Message
    "Message",
    "Urgency",
    # Lifetime
    "LengthOfTime",
    "TimeUnit",
    # Devices
    "AndroidDevice",
    "IOSDevice",
    "MobileDevice",
]

from .application import Application, ProgrammingLanguage
from .base import BaseModel
from .device import AndroidDevice, IOSDevice, MobileDevice
from .enum import DeploymentEnvironment, Tier
from .id import ID, IDSet
from .lifetime import LengthOfTime, TimeUnit
from .message import Message, Urgency
from .organization import Industry, Organization
from .user import Role, User
