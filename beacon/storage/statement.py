"""Every SQL statement the repositories issue, keyed by what it does.

Statements are SQLAlchemy Core constructs over `beacon.storage.table` with
named bind parameters; the caller supplies their values at execution. Upserts
are dialect constructs, so they are held as `Upsert` and built for the dialect
of the session's bind when first executed there.
"""

from __future__ import annotations

import enum
import typing as t

import sqlalchemy as sqla
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.sql import Executable

from . import table

Organizations: sqla.Table = table.organizations.__table__
OrganizationOwners: sqla.Table = table.organization_owners.__table__
OrganizationMembers: sqla.Table = table.organization_members.__table__
Users: sqla.Table = table.users.__table__
Applications: sqla.Table = table.applications.__table__
Credentials: sqla.Table = table.credentials.__table__
Followings: sqla.Table = table.followings.__table__
Messages: sqla.Table = table.messages.__table__
Inbox: sqla.Table = table.inbox.__table__
UserDevices: sqla.Table = table.user_devices.__table__


class Upsert(object):
    """INSERT .. ON CONFLICT (key) DO UPDATE, or DO NOTHING when every column is part of the key."""

    Dialects: t.ClassVar[dict[str, t.Callable[[sqla.Table], t.Any]]] = {
        "postgresql": postgresql.insert,
        "sqlite": sqlite.insert,
    }

    def __init__(self, table: sqla.Table, *key: str):
        self.table = table
        self.key = key
        self._built: dict[str, Executable] = {}

    def for_dialect(self, name: str) -> Executable:
        if name not in self._built:
            try:
                insert = self.Dialects[name]
            except KeyError:
                raise NotImplementedError(f"no upsert for dialect {name}") from None

            stmt = insert(self.table).values({c.name: sqla.bindparam(c.name, type_=c.type) for c in self.table.columns})
            updates = {c.name: stmt.excluded[c.name] for c in self.table.columns if c.name not in self.key}
            if updates:
                stmt = stmt.on_conflict_do_update(index_elements=list(self.key), set_=updates)
            else:
                stmt = stmt.on_conflict_do_nothing(index_elements=list(self.key))
            self._built[name] = stmt
        return self._built[name]


StatementText = Executable | Upsert


def _param(name: str) -> sqla.BindParameter[t.Any]:
    return sqla.bindparam(name)


def _unexpired(table: sqla.Table) -> sqla.ColumnElement[bool]:
    return sqla.or_(table.c.time_of_expiration.is_(None), table.c.time_of_expiration > _param("now"))


def _exists(*criteria: sqla.ColumnElement[bool]) -> Executable:
    return sqla.select(sqla.exists().where(*criteria))


class Inserts(enum.Enum):
    ORGANIZATION = enum.auto()
    ORGANIZATION_OWNER = enum.auto()
    ORGANIZATION_MEMBER = enum.auto()
    ENCRYPTED_PASSWORD = enum.auto()
    FOLLOWING = enum.auto()
    INBOX_MESSAGE = enum.auto()
    MESSAGE = enum.auto()
    USER_DEVICE = enum.auto()

    @property
    def sql(self) -> StatementText:
        return Catalog[self]


class Queries(enum.Enum):
    SELECT_ORGANIZATION = enum.auto()
    SELECT_ORGANIZATION_OWNER_IDS = enum.auto()
    SELECT_ORGANIZATION_OWNERS = enum.auto()
    SELECT_ORGANIZATION_MEMBERS = enum.auto()
    SEARCH_ORGANIZATION_BY_NAME = enum.auto()
    CHECK_ORGANIZATION = enum.auto()
    CHECK_ORGANIZATION_HAS_MEMBER = enum.auto()

    SELECT_ENCRYPTED_PASSWORD = enum.auto()
    CHECK_ENCRYPTED_PASSWORD = enum.auto()

    CHECK_FOLLOWING_EXISTS = enum.auto()
    SELECT_APPS_FOLLOWED_BY_USER = enum.auto()
    SELECT_APP_FOLLOWERS = enum.auto()

    SELECT_INBOX_MESSAGES_FOR_USER = enum.auto()
    CHECK_INBOX_MESSAGE = enum.auto()
    COUNT_INBOX_MESSAGES = enum.auto()

    SELECT_MESSAGE = enum.auto()
    CHECK_MESSAGE = enum.auto()
    SELECT_MESSAGES_BY_HOSTNAME = enum.auto()
    SELECT_MESSAGES_BY_APPLICATION = enum.auto()
    SELECT_MESSAGES_BY_TITLE = enum.auto()
    COUNT_MESSAGES = enum.auto()

    SELECT_USER_DEVICES = enum.auto()

    @property
    def sql(self) -> StatementText:
        return Catalog[self]


class Deletes(enum.Enum):
    ORGANIZATION = enum.auto()
    ORGANIZATION_ALL_OWNERS = enum.auto()
    ORGANIZATION_MEMBER = enum.auto()
    ORGANIZATION_ALL_MEMBERS = enum.auto()
    ENCRYPTED_PASSWORD = enum.auto()
    FOLLOWING = enum.auto()
    INBOX_MESSAGE = enum.auto()
    INBOX_ALL_MESSAGES = enum.auto()
    MESSAGE = enum.auto()
    USER_DEVICE = enum.auto()
    USER_ALL_DEVICES = enum.auto()

    @property
    def sql(self) -> StatementText:
        return Catalog[self]


Statement = Inserts | Queries | Deletes

# inbox rows carry a copy of the message, and read back as one
MessageColumns = (
    "message_id",
    "application_id",
    "application_name",
    "title",
    "body",
    "urgency",
    "time_of_creation",
    "time_message_received",
    "hostname",
    "mac_address",
    "device_name",
)


def _message_columns(table: sqla.Table) -> list[sqla.ColumnElement[t.Any]]:
    return [table.c[name] for name in MessageColumns]


def _newest_first(table: sqla.Table) -> tuple[sqla.ColumnElement[t.Any], ...]:
    return table.c.time_of_creation.desc(), table.c.message_id


Catalog: dict[Statement, StatementText] = {
    # organizations
    Inserts.ORGANIZATION: Upsert(Organizations, "organization_id"),
    Inserts.ORGANIZATION_OWNER: Upsert(OrganizationOwners, "organization_id", "user_id"),
    Inserts.ORGANIZATION_MEMBER: Upsert(OrganizationMembers, "organization_id", "user_id"),
    Queries.SELECT_ORGANIZATION: sqla.select(Organizations).where(
        Organizations.c.organization_id == _param("organization_id")
    ),
    Queries.SELECT_ORGANIZATION_OWNER_IDS: sqla.select(OrganizationOwners.c.user_id)
    .where(OrganizationOwners.c.organization_id == _param("organization_id"))
    .order_by(OrganizationOwners.c.user_id),
    # owners without a users row still come back, carrying only their id
    Queries.SELECT_ORGANIZATION_OWNERS: sqla.select(
        OrganizationOwners.c.user_id,
        Users.c.first_name,
        Users.c.middle_name,
        Users.c.last_name,
        Users.c.email,
        Users.c.roles,
        Users.c.github_profile,
    )
    .select_from(OrganizationOwners)
    .outerjoin(Users, Users.c.user_id == OrganizationOwners.c.user_id)
    .where(OrganizationOwners.c.organization_id == _param("organization_id"))
    .order_by(OrganizationOwners.c.user_id),
    Queries.SELECT_ORGANIZATION_MEMBERS: sqla.select(
        OrganizationMembers.c.user_id,
        OrganizationMembers.c.user_first_name.label("first_name"),
        OrganizationMembers.c.user_middle_name.label("middle_name"),
        OrganizationMembers.c.user_last_name.label("last_name"),
        OrganizationMembers.c.user_email.label("email"),
        OrganizationMembers.c.user_roles.label("roles"),
    )
    .where(OrganizationMembers.c.organization_id == _param("organization_id"))
    .order_by(OrganizationMembers.c.user_id),
    Queries.SEARCH_ORGANIZATION_BY_NAME: sqla.select(Organizations)
    .where(sqla.func.lower(Organizations.c.organization_name).like(sqla.func.lower(_param("term")), escape="\\"))
    .order_by(Organizations.c.organization_name),
    Queries.CHECK_ORGANIZATION: _exists(Organizations.c.organization_id == _param("organization_id")),
    Queries.CHECK_ORGANIZATION_HAS_MEMBER: _exists(
        OrganizationMembers.c.organization_id == _param("organization_id"),
        OrganizationMembers.c.user_id == _param("user_id"),
    ),
    Deletes.ORGANIZATION: sqla.delete(Organizations).where(
        Organizations.c.organization_id == _param("organization_id")
    ),
    Deletes.ORGANIZATION_ALL_OWNERS: sqla.delete(OrganizationOwners).where(
        OrganizationOwners.c.organization_id == _param("organization_id")
    ),
    Deletes.ORGANIZATION_MEMBER: sqla.delete(OrganizationMembers).where(
        OrganizationMembers.c.organization_id == _param("organization_id"),
        OrganizationMembers.c.user_id == _param("user_id"),
    ),
    Deletes.ORGANIZATION_ALL_MEMBERS: sqla.delete(OrganizationMembers).where(
        OrganizationMembers.c.organization_id == _param("organization_id")
    ),
    # credentials
    Inserts.ENCRYPTED_PASSWORD: Upsert(Credentials, "user_id"),
    Queries.SELECT_ENCRYPTED_PASSWORD: sqla.select(Credentials.c.encrypted_password).where(
        Credentials.c.user_id == _param("user_id")
    ),
    Queries.CHECK_ENCRYPTED_PASSWORD: _exists(Credentials.c.user_id == _param("user_id")),
    Deletes.ENCRYPTED_PASSWORD: sqla.delete(Credentials).where(Credentials.c.user_id == _param("user_id")),
    # followings
    Inserts.FOLLOWING: Upsert(Followings, "application_id", "user_id"),
    Queries.CHECK_FOLLOWING_EXISTS: _exists(
        Followings.c.application_id == _param("application_id"),
        Followings.c.user_id == _param("user_id"),
    ),
    Queries.SELECT_APPS_FOLLOWED_BY_USER: sqla.select(Applications)
    .join(Followings, Followings.c.application_id == Applications.c.application_id)
    .where(Followings.c.user_id == _param("user_id"))
    .order_by(Followings.c.time_of_follow, Applications.c.application_id),
    Queries.SELECT_APP_FOLLOWERS: sqla.select(Users)
    .join(Followings, Followings.c.user_id == Users.c.user_id)
    .where(Followings.c.application_id == _param("application_id"))
    .order_by(Followings.c.time_of_follow, Users.c.user_id),
    Deletes.FOLLOWING: sqla.delete(Followings).where(
        Followings.c.application_id == _param("application_id"),
        Followings.c.user_id == _param("user_id"),
    ),
    # inbox
    Inserts.INBOX_MESSAGE: Upsert(Inbox, "user_id", "message_id"),
    Queries.SELECT_INBOX_MESSAGES_FOR_USER: sqla.select(*_message_columns(Inbox))
    .where(Inbox.c.user_id == _param("user_id"), Inbox.c.time_of_expiration > _param("now"))
    .order_by(*_newest_first(Inbox)),
    Queries.CHECK_INBOX_MESSAGE: _exists(
        Inbox.c.user_id == _param("user_id"),
        Inbox.c.message_id == _param("message_id"),
        Inbox.c.time_of_expiration > _param("now"),
    ),
    Queries.COUNT_INBOX_MESSAGES: sqla.select(sqla.func.count())
    .select_from(Inbox)
    .where(Inbox.c.user_id == _param("user_id"), Inbox.c.time_of_expiration > _param("now")),
    Deletes.INBOX_MESSAGE: sqla.delete(Inbox).where(
        Inbox.c.user_id == _param("user_id"), Inbox.c.message_id == _param("message_id")
    ),
    Deletes.INBOX_ALL_MESSAGES: sqla.delete(Inbox).where(Inbox.c.user_id == _param("user_id")),
    # messages
    Inserts.MESSAGE: Upsert(Messages, "message_id"),
    Queries.SELECT_MESSAGE: sqla.select(*_message_columns(Messages)).where(
        Messages.c.application_id == _param("application_id"),
        Messages.c.message_id == _param("message_id"),
        _unexpired(Messages),
    ),
    Queries.CHECK_MESSAGE: _exists(
        Messages.c.application_id == _param("application_id"),
        Messages.c.message_id == _param("message_id"),
        _unexpired(Messages),
    ),
    Queries.SELECT_MESSAGES_BY_HOSTNAME: sqla.select(*_message_columns(Messages))
    .where(Messages.c.hostname == _param("hostname"), _unexpired(Messages))
    .order_by(*_newest_first(Messages)),
    Queries.SELECT_MESSAGES_BY_APPLICATION: sqla.select(*_message_columns(Messages))
    .where(Messages.c.application_id == _param("application_id"), _unexpired(Messages))
    .order_by(*_newest_first(Messages)),
    Queries.SELECT_MESSAGES_BY_TITLE: sqla.select(*_message_columns(Messages))
    .where(
        Messages.c.application_id == _param("application_id"),
        Messages.c.title == _param("title"),
        _unexpired(Messages),
    )
    .order_by(*_newest_first(Messages)),
    Queries.COUNT_MESSAGES: sqla.select(sqla.func.count())
    .select_from(Messages)
    .where(Messages.c.application_id == _param("application_id"), _unexpired(Messages)),
    Deletes.MESSAGE: sqla.delete(Messages).where(
        Messages.c.application_id == _param("application_id"), Messages.c.message_id == _param("message_id")
    ),
    # user preferences
    Inserts.USER_DEVICE: Upsert(UserDevices, "user_id", "serialized_device"),
    Queries.SELECT_USER_DEVICES: sqla.select(UserDevices.c.serialized_device)
    .where(UserDevices.c.user_id == _param("user_id"))
    .order_by(UserDevices.c.serialized_device),
    Deletes.USER_DEVICE: sqla.delete(UserDevices).where(
        UserDevices.c.user_id == _param("user_id"),
        UserDevices.c.serialized_device == _param("serialized_device"),
    ),
    Deletes.USER_ALL_DEVICES: sqla.delete(UserDevices).where(UserDevices.c.user_id == _param("user_id")),
}
