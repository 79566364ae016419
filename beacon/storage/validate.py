"""Argument checks run before any statement reaches the database.

Every failure raises `InvalidArgumentError`. Identifier checks return the
canonical form that should be bound.
"""

import typing as t

import beacon.lib.uuid as uuid_
from beacon.model import Application, Message, MobileDevice, Organization, User

from .errors import InvalidArgumentError


def non_empty(value: t.Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} must be a non-empty string")
    return value


def uuid(value: t.Any, name: str) -> str:
    non_empty(value, name)
    try:
        return uuid_.canonical(value)
    except ValueError as ex:
        raise InvalidArgumentError(f"{name} must be a valid UUID: {value!r}") from ex


def present(value: t.Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} is missing")


def organization(org: Organization | None) -> str:
    present(org, "organization")
    org = t.cast(Organization, org)
    org_id = uuid(org.organization_id, "organization_id")
    non_empty(org.organization_name, "organization_name")
    for owner in org.owners:
        uuid(owner, "owner")
    return org_id


def user(u: User | None) -> str:
    present(u, "user")
    return uuid(t.cast(User, u).user_id, "user_id")


def application(app: Application | None) -> str:
    present(app, "application")
    return uuid(t.cast(Application, app).application_id, "application_id")


def message(msg: Message | None) -> str:
    present(msg, "message")
    msg = t.cast(Message, msg)
    msg_id = uuid(msg.message_id, "message_id")
    uuid(msg.application_id, "application_id")
    non_empty(msg.title, "title")
    return msg_id


def device(d: MobileDevice | None) -> MobileDevice:
    present(d, "device")
    d = t.cast(MobileDevice, d)
    match (d.ios_device, d.android_device):
        case (None, None):
            raise InvalidArgumentError("device names no platform")
        case (ios, None) if ios is not None:
            non_empty(ios.device_token, "device_token")
        case (None, android) if android is not None:
            non_empty(android.registration_id, "registration_id")
        case _:
            raise InvalidArgumentError("device names more than one platform")
    return d
