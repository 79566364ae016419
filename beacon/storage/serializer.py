"""Conversion between result rows and domain models.

A serializer turns a row mapping into a model and a model into the bind
parameters its statements expect. The registry is built once and handed to
each repository; nothing is looked up by reflection.
"""

from __future__ import annotations

import typing as t

import beacon.lib.json as json
import beacon.lib.uuid as uuid
from beacon.model import Application, Message, MobileDevice, Organization, Role, User

T = t.TypeVar("T")

Row = t.Mapping[str, t.Any]


class Serializer(t.Protocol[T]):
    def serialize(self, obj: T) -> dict[str, t.Any]: ...

    def deserialize(self, row: Row) -> T: ...


def _value(member: t.Any) -> t.Any:
    return member.value if member is not None else None


def dump_roles(roles: t.Iterable[Role]) -> str:
    return json.dumps(sorted(r.value for r in roles))


def load_roles(roles: str | None) -> list[Role]:
    if not roles:
        return []
    return [Role(r) for r in json.loads(roles)]


class OrganizationSerializer(object):
    """Owners live in their own table, so they are neither written nor read here."""

    def serialize(self, obj: Organization) -> dict[str, t.Any]:
        return {
            "organization_id": uuid.canonical(obj.organization_id),
            "organization_name": obj.organization_name,
            "logo_link": obj.logo_link,
            "industry": _value(obj.industry),
            "organization_email": obj.organization_email,
            "github_profile": obj.github_profile,
            "stock_market_symbol": obj.stock_market_symbol,
            "tier": _value(obj.tier),
            "organization_description": obj.organization_description,
            "website": obj.website,
        }

    def deserialize(self, row: Row) -> Organization:
        return Organization.model_validate({k: v for k, v in row.items() if k != "owners"})


class UserSerializer(object):
    def serialize(self, obj: User) -> dict[str, t.Any]:
        return {
            "user_id": uuid.canonical(obj.user_id),
            "first_name": obj.first_name,
            "middle_name": obj.middle_name,
            "last_name": obj.last_name,
            "email": obj.email,
            "roles": dump_roles(obj.roles),
            "github_profile": obj.github_profile,
        }

    def deserialize(self, row: Row) -> User:
        return User(
            user_id=row["user_id"],
            first_name=row.get("first_name"),
            middle_name=row.get("middle_name"),
            last_name=row.get("last_name"),
            email=row.get("email"),
            roles=load_roles(row.get("roles")),
            github_profile=row.get("github_profile"),
        )


class ApplicationSerializer(object):
    def serialize(self, obj: Application) -> dict[str, t.Any]:
        return {
            "application_id": uuid.canonical(obj.application_id),
            "name": obj.name,
            "organization_id": uuid.canonical(obj.organization_id) if obj.organization_id is not None else None,
            "application_description": obj.application_description,
            "programming_language": _value(obj.programming_language),
            "tier": _value(obj.tier),
            "time_of_provisioning": obj.time_of_provisioning,
        }

    def deserialize(self, row: Row) -> Application:
        return Application.model_validate(dict(row))


class MessageSerializer(object):
    def serialize(self, obj: Message) -> dict[str, t.Any]:
        return {
            "message_id": uuid.canonical(obj.message_id),
            "application_id": uuid.canonical(obj.application_id),
            "application_name": obj.application_name,
            "title": obj.title,
            "body": obj.body,
            "urgency": _value(obj.urgency),
            "time_of_creation": obj.time_of_creation,
            "time_message_received": obj.time_message_received,
            "hostname": obj.hostname,
            "mac_address": obj.mac_address,
            "device_name": obj.device_name,
        }

    def deserialize(self, row: Row) -> Message:
        return Message.model_validate(dict(row))


class MobileDeviceSerializer(object):
    """Devices are stored as canonical JSON so equal devices produce equal rows."""

    def serialize(self, obj: MobileDevice) -> dict[str, t.Any]:
        return {"serialized_device": obj.model_dump_json(exclude_none=True)}

    def deserialize(self, row: Row) -> MobileDevice:
        return MobileDevice.model_validate_json(row["serialized_device"])


class SerializerRegistry(object):
    def __init__(self, serializers: t.Mapping[type, Serializer[t.Any]]):
        self._serializers = dict(serializers)

    def __getitem__(self, type_: type[T]) -> Serializer[T]:
        try:
            return self._serializers[type_]
        except KeyError:
            raise LookupError(f"no serializer registered for {type_.__name__}") from None

    def __contains__(self, type_: type) -> bool:
        return type_ in self._serializers


def provide_serializers() -> SerializerRegistry:
    return SerializerRegistry(
        {
            Application: ApplicationSerializer(),
            Message: MessageSerializer(),
            MobileDevice: MobileDeviceSerializer(),
            Organization: OrganizationSerializer(),
            User: UserSerializer(),
        }
    )
