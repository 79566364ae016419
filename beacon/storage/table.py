import datetime

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, MappedAsDataclass
from sqlalchemy.types import String, Text

from .type import UTCDateTime

metadata = MetaData()

ID = String(36)


class base(MappedAsDataclass, DeclarativeBase):
    metadata = metadata
    type_annotation_map = {
        str: String,
        datetime.datetime: UTCDateTime(),
    }


# Organizations


class organizations(base):
    __tablename__ = "organizations"

    organization_id: Mapped[str] = mapped_column(ID, primary_key=True)
    organization_name: Mapped[str]
    logo_link: Mapped[str | None] = mapped_column(default=None)
    industry: Mapped[str | None] = mapped_column(default=None)
    organization_email: Mapped[str | None] = mapped_column(default=None)
    github_profile: Mapped[str | None] = mapped_column(default=None)
    stock_market_symbol: Mapped[str | None] = mapped_column(default=None)
    tier: Mapped[str | None] = mapped_column(default=None)
    organization_description: Mapped[str | None] = mapped_column(Text, default=None)
    website: Mapped[str | None] = mapped_column(default=None)


class organization_owners(base):
    __tablename__ = "organization_owners"

    organization_id: Mapped[str] = mapped_column(ID, primary_key=True)
    user_id: Mapped[str] = mapped_column(ID, primary_key=True)


class organization_members(base):
    """Membership rows carry a copy of the member's descriptive fields."""

    __tablename__ = "organization_members"

    organization_id: Mapped[str] = mapped_column(ID, primary_key=True)
    user_id: Mapped[str] = mapped_column(ID, primary_key=True)
    user_first_name: Mapped[str | None] = mapped_column(default=None)
    user_middle_name: Mapped[str | None] = mapped_column(default=None)
    user_last_name: Mapped[str | None] = mapped_column(default=None)
    user_email: Mapped[str | None] = mapped_column(default=None)
    user_roles: Mapped[str] = mapped_column(Text, default="[]")


# Users & applications


class users(base):
    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(ID, primary_key=True)
    first_name: Mapped[str | None] = mapped_column(default=None)
    middle_name: Mapped[str | None] = mapped_column(default=None)
    last_name: Mapped[str | None] = mapped_column(default=None)
    email: Mapped[str | None] = mapped_column(default=None)
    roles: Mapped[str] = mapped_column(Text, default="[]")
    github_profile: Mapped[str | None] = mapped_column(default=None)


class applications(base):
    __tablename__ = "applications"

    application_id: Mapped[str] = mapped_column(ID, primary_key=True)
    name: Mapped[str | None] = mapped_column(default=None)
    organization_id: Mapped[str | None] = mapped_column(ID, default=None)
    application_description: Mapped[str | None] = mapped_column(Text, default=None)
    programming_language: Mapped[str | None] = mapped_column(default=None)
    tier: Mapped[str | None] = mapped_column(default=None)
    time_of_provisioning: Mapped[datetime.datetime | None] = mapped_column(default=None)


class credentials(base):
    __tablename__ = "credentials"

    user_id: Mapped[str] = mapped_column(ID, primary_key=True)
    encrypted_password: Mapped[str] = mapped_column(Text)
    time_created: Mapped[datetime.datetime]


class followings(base):
    __tablename__ = "followings"

    application_id: Mapped[str] = mapped_column(ID, primary_key=True)
    user_id: Mapped[str] = mapped_column(ID, primary_key=True)
    time_of_follow: Mapped[datetime.datetime]


# Messages


class messages(base):
    __tablename__ = "messages"

    message_id: Mapped[str] = mapped_column(ID, primary_key=True)
    application_id: Mapped[str] = mapped_column(ID, index=True)
    title: Mapped[str]
    application_name: Mapped[str | None] = mapped_column(default=None)
    body: Mapped[str | None] = mapped_column(Text, default=None)
    urgency: Mapped[str | None] = mapped_column(default=None)
    time_of_creation: Mapped[datetime.datetime | None] = mapped_column(default=None)
    time_message_received: Mapped[datetime.datetime | None] = mapped_column(default=None)
    hostname: Mapped[str | None] = mapped_column(default=None, index=True)
    mac_address: Mapped[str | None] = mapped_column(default=None)
    device_name: Mapped[str | None] = mapped_column(default=None)
    time_of_expiration: Mapped[datetime.datetime | None] = mapped_column(default=None)


class inbox(base):
    __tablename__ = "inbox"

    user_id: Mapped[str] = mapped_column(ID, primary_key=True)
    message_id: Mapped[str] = mapped_column(ID, primary_key=True)
    application_id: Mapped[str] = mapped_column(ID)
    title: Mapped[str]
    time_of_expiration: Mapped[datetime.datetime]
    application_name: Mapped[str | None] = mapped_column(default=None)
    body: Mapped[str | None] = mapped_column(Text, default=None)
    urgency: Mapped[str | None] = mapped_column(default=None)
    time_of_creation: Mapped[datetime.datetime | None] = mapped_column(default=None)
    time_message_received: Mapped[datetime.datetime | None] = mapped_column(default=None)
    hostname: Mapped[str | None] = mapped_column(default=None)
    mac_address: Mapped[str | None] = mapped_column(default=None)
    device_name: Mapped[str | None] = mapped_column(default=None)


class user_devices(base):
    __tablename__ = "user_devices"

    user_id: Mapped[str] = mapped_column(ID, primary_key=True)
    serialized_device: Mapped[str] = mapped_column(String(1024), primary_key=True)
