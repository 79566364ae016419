import datetime
import enum

from .base import BaseModel
from .id import ID


class Urgency(enum.Enum):
    Low = "low"
    Medium = "medium"
    High = "high"


class Message(BaseModel):
    message_id: ID
    application_id: ID
    application_name: str | None = None
    title: str | None = None
    body: str | None = None
    urgency: Urgency | None = None
    time_of_creation: datetime.datetime | None = None
    time_message_received: datetime.datetime | None = None
    hostname: str | None = None
    mac_address: str | None = None
    device_name: str | None = None
