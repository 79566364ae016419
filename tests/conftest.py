"""Pytest fixtures for beacon storage tests.

The container is booted once per session in the test environment, which
points the engine at an in-memory SQLite database. Every test gets a freshly
created schema, a session on that engine and repositories built from it.

Usage:
    def test_get(organization_repository, org_factory):
        org = org_factory(organization_name="Acme")
        assert organization_repository.get(org.organization_id) == org
"""

from __future__ import annotations

import datetime
import os
import typing as t
from pathlib import Path

import pydantic as p
import pytest
import sqlalchemy
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

import beacon
import beacon.lib.uuid as uuid
from beacon.core import BeaconContainer
from beacon.model import Application, DeploymentEnvironment, LengthOfTime, Message, Organization, Role, TimeUnit, \
    Urgency, User
from beacon.storage.credential import CredentialRepository
from beacon.storage.executor import ExecutionError, Executor, Outcome
from beacon.storage.follower import FollowerRepository
from beacon.storage.inbox import InboxRepository
from beacon.storage.message import MessageRepository
from beacon.storage.organization import OrganizationLifecycleManager, OrganizationRepository
from beacon.storage.preferences import UserPreferencesRepository
from beacon.storage.serializer import dump_roles, SerializerRegistry
from beacon.storage.statement import Statement
from beacon.storage.table import applications, metadata, organization_members, organization_owners, organizations, \
    users

T = t.TypeVar("T")

Epoch = datetime.datetime(2026, 1, 1, 12, 0, tzinfo=datetime.UTC)


def new_id() -> str:
    return str(uuid.uuid4())


class Clock(object):
    """A settable timestamp provider."""

    def __init__(self, now: datetime.datetime = Epoch):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, delta: datetime.timedelta) -> None:
        self.now += delta


class RecordingExecutor(Executor):
    """Executor that remembers every statement it was asked to run."""

    def __init__(self, session: Session):
        super().__init__(session)
        self.executed: list[Statement] = []

    def statements_of(self, kind: type) -> list[Statement]:
        return [s for s in self.executed if isinstance(s, kind)]

    def _run(
        self, statement: Statement, params: dict[str, t.Any], consume: t.Callable[[sqlalchemy.Result[t.Any]], T]
    ) -> Outcome[T]:
        self.executed.append(statement)
        return super()._run(statement, params, consume)


class FailingExecutor(RecordingExecutor):
    """Executor reporting a database failure for the chosen statements without running them."""

    def __init__(self, session: Session, *fail_on: Statement):
        super().__init__(session)
        self.fail_on = set(fail_on)

    def _run(
        self, statement: Statement, params: dict[str, t.Any], consume: t.Callable[[sqlalchemy.Result[t.Any]], T]
    ) -> Outcome[T]:
        if statement in self.fail_on:
            self.executed.append(statement)
            return ExecutionError(OperationalError(str(statement), params, Exception("database unavailable")))
        return super()._run(statement, params, consume)


@pytest.fixture(scope="session")
def container() -> t.Generator[BeaconContainer]:
    """Boot the DI container for the test session."""
    ct = BeaconContainer()
    root = Path(os.path.dirname(beacon.__file__)).parent

    BeaconContainer.boot(
        ct,
        debug=True,
        env=DeploymentEnvironment.Test,
        config_root=p.FileUrl(f"file://{root}/config"),
        override=(),
    )

    yield ct

    ct.shutdown_resources()


@pytest.fixture
def engine(container: BeaconContainer) -> t.Generator[sqlalchemy.Engine]:
    """The shared in-memory engine, with every table created for this test only."""
    engine = container.storage().persistent().engine()
    metadata.create_all(engine)

    yield engine

    metadata.drop_all(engine)


@pytest.fixture
def db_session(engine: sqlalchemy.Engine) -> t.Generator[Session]:
    session = Session(bind=engine, autobegin=False, expire_on_commit=False)

    yield session

    session.close()


@pytest.fixture
def executor(db_session: Session) -> RecordingExecutor:
    return RecordingExecutor(db_session)


@pytest.fixture
def serializers(container: BeaconContainer) -> SerializerRegistry:
    return container.storage().serializers()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def organization_repository(executor: Executor, serializers: SerializerRegistry) -> OrganizationRepository:
    return OrganizationRepository(executor, serializers)


@pytest.fixture
def lifecycle(executor: Executor, serializers: SerializerRegistry) -> OrganizationLifecycleManager:
    return OrganizationLifecycleManager(executor, serializers)


@pytest.fixture
def credential_repository(executor: Executor, serializers: SerializerRegistry, clock: Clock) -> CredentialRepository:
    return CredentialRepository(executor, serializers, utcnow=clock)


@pytest.fixture
def follower_repository(executor: Executor, serializers: SerializerRegistry, clock: Clock) -> FollowerRepository:
    return FollowerRepository(executor, serializers, utcnow=clock)


@pytest.fixture
def inbox_repository(executor: Executor, serializers: SerializerRegistry, clock: Clock) -> InboxRepository:
    return InboxRepository(
        executor, serializers, utcnow=clock, default_lifetime=LengthOfTime(value=3, unit=TimeUnit.Days)
    )


@pytest.fixture
def preferences_repository(executor: Executor, serializers: SerializerRegistry) -> UserPreferencesRepository:
    return UserPreferencesRepository(executor, serializers)


@pytest.fixture
def message_repository(executor: Executor, serializers: SerializerRegistry, clock: Clock) -> MessageRepository:
    return MessageRepository(executor, serializers, utcnow=clock)


@pytest.fixture
def user_factory(db_session: Session) -> t.Callable[..., User]:
    """Factory fixture inserting rows into `users`.

    Usage:
        def test_something(user_factory):
            user = user_factory(first_name="Ada", roles=[Role.Developer])
    """

    def create_user(
        first_name: str = "Test",
        last_name: str = "User",
        email: str | None = None,
        roles: list[Role] | None = None,
    ) -> User:
        user = User(
            user_id=new_id(),
            first_name=first_name,
            last_name=last_name,
            email=email or f"{first_name.lower()}@example.com",
            roles=roles or [Role.Developer],
        )
        with db_session.begin():
            db_session.add(
                users(
                    user_id=user.user_id,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    email=user.email,
                    roles=dump_roles(user.roles),
                )
            )
        return user

    return create_user


@pytest.fixture
def org_factory(db_session: Session) -> t.Callable[..., Organization]:
    """Factory fixture inserting an organization row and its owner links."""

    def create_organization(
        organization_name: str = "Test Organization",
        owners: list[str] | None = None,
        members: list[User] | None = None,
    ) -> Organization:
        org = Organization(
            organization_id=new_id(),
            organization_name=organization_name,
            owners=sorted(owners or []),
            organization_email="contact@example.com",
        )
        with db_session.begin():
            db_session.add(
                organizations(
                    organization_id=org.organization_id,
                    organization_name=organization_name,
                    organization_email=org.organization_email,
                )
            )
            for owner in org.owners:
                db_session.add(organization_owners(organization_id=org.organization_id, user_id=owner))
            for member in members or []:
                db_session.add(
                    organization_members(
                        organization_id=org.organization_id,
                        user_id=member.user_id,
                        user_first_name=member.first_name,
                        user_last_name=member.last_name,
                        user_email=member.email,
                        user_roles=dump_roles(member.roles),
                    )
                )
        return org

    return create_organization


@pytest.fixture
def application_factory(db_session: Session) -> t.Callable[..., Application]:
    def create_application(name: str = "Test Application", organization_id: str | None = None) -> Application:
        app = Application(
            application_id=new_id(),
            name=name,
            organization_id=organization_id,
            time_of_provisioning=Epoch,
        )
        with db_session.begin():
            db_session.add(
                applications(
                    application_id=app.application_id,
                    name=name,
                    organization_id=organization_id,
                    time_of_provisioning=Epoch,
                )
            )
        return app

    return create_application


@pytest.fixture
def message_factory() -> t.Callable[..., Message]:
    """Build (but do not store) messages, each created a minute after the last."""
    created = [Epoch]

    def create_message(
        application_id: str | None = None, title: str = "Build failed", hostname: str = "ci-1.example.com"
    ) -> Message:
        created[0] += datetime.timedelta(minutes=1)
        return Message(
            message_id=new_id(),
            application_id=application_id or new_id(),
            application_name="ci",
            title=title,
            body="the build is broken",
            urgency=Urgency.High,
            time_of_creation=created[0],
            hostname=hostname,
        )

    return create_message
