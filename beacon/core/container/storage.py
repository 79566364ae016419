from __future__ import annotations

import typing as t
from pathlib import Path

import alembic.config
import sqlalchemy
import sqlalchemy.event
import sqlalchemy.orm
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Factory, Object, Provider, Resource, Singleton
from sqlalchemy.engine.url import URL as DSN
from sqlalchemy.pool import StaticPool

import beacon.lib.json as json
from beacon.lib.sql import DebugQuery, DebugSession
from beacon.model import LengthOfTime
from beacon.storage.credential import CredentialRepository
from beacon.storage.executor import Executor
from beacon.storage.follower import FollowerRepository
from beacon.storage.inbox import InboxRepository
from beacon.storage.message import MessageRepository
from beacon.storage.organization import OrganizationLifecycleManager, OrganizationRepository
from beacon.storage.preferences import UserPreferencesRepository
from beacon.storage.serializer import provide_serializers, SerializerRegistry

from ..config.secrets import DatabaseSecrets, StorageSecrets
from ..config.storage import DatabaseSettings, StorageSettings
from ..di import NotReady
from ..provider import LoggingProvider, TimestampProvider


def database_dsn(config: DatabaseSettings, secrets: DatabaseSecrets) -> DSN:
    if config.is_sqlite:
        return DSN.create(config.driver, database=config.database)
    return DSN.create(
        config.driver,
        port=config.port,
        host=str(config.host) if config.host else None,
        username=secrets.username.get_secret_value() if secrets.username else None,
        password=secrets.password.get_secret_value() if secrets.password else None,
        database=config.database,
    )


def provide_alembic_conf(
    migration_path: Path, config: DatabaseSettings, secrets: DatabaseSecrets, root: Path | NotReady
) -> alembic.config.Config:
    if isinstance(root, NotReady):
        raise RuntimeError("root path is unavailable")

    escaped_str = database_dsn(config, secrets).render_as_string(hide_password=False).replace("%", "%%")

    ac = alembic.config.Config()
    ac.set_main_option("script_location", str(root / migration_path))
    ac.set_section_option("alembic", "sqlalchemy.url", escaped_str)
    ac.set_section_option("alembic", "file_template", "%%(year)d-%%(month).2d-%%(day).2d-%%(slug)s-%%(rev)s")
    return ac


def provide_engine(config: DatabaseSettings, secrets: DatabaseSecrets, logging: LoggingProvider) -> sqlalchemy.Engine:
    logger = logging.get_logger()

    kwargs: dict[str, t.Any] = {"json_serializer": json.dumps, "json_deserializer": json.loads}
    if config.is_sqlite and config.database == ":memory:":
        # one shared connection, otherwise every checkout sees an empty database
        kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})

    engine = sqlalchemy.create_engine(database_dsn(config, secrets), **kwargs)
    if config.is_sqlite:
        sqlalchemy.event.listen(engine, "connect", register_sqlite_pragmas)
        sqlalchemy.event.listen(engine, "begin", begin_sqlite_transaction)
    else:
        sqlalchemy.event.listen(engine, "connect", register_timezone)
    logger.info(
        "initialized SQLAlchemy engine",
        extra={
            "driver": config.driver,
            "database": config.database,
            "host": config.host,
            "port": config.port,
        },
    )
    return engine


def provide_session(debug: bool, engine: sqlalchemy.Engine) -> sqlalchemy.orm.Session:
    """Create a new session. Caller is responsible for closing it (an Executor does so)."""
    if debug:
        maker = sqlalchemy.orm.sessionmaker(engine, class_=DebugSession, expire_on_commit=False, autoflush=False)
        return maker(query_cls=DebugQuery, autobegin=False)
    else:
        maker = sqlalchemy.orm.sessionmaker(engine, expire_on_commit=False, autoflush=False)
        return maker(autobegin=False)


class PersistentContainer(DeclarativeContainer):
    config = Configuration()
    secrets = Configuration()
    debug: Provider[bool] = Object()
    logging: Provider[LoggingProvider] = Resource()
    root: Provider[Path | NotReady] = Object()

    alembic_config: Provider[alembic.config.Config] = Singleton(
        provide_alembic_conf,
        migration_path=Path("migrations/"),
        config=config.database.as_(DatabaseSettings),
        secrets=secrets.database.as_(DatabaseSecrets),
        root=root,
    )
    engine: Provider[sqlalchemy.Engine] = Singleton(
        provide_engine,
        config=config.database.as_(DatabaseSettings),
        secrets=secrets.database.as_(DatabaseSecrets),
        logging=logging,
    )
    session: Provider[sqlalchemy.orm.Session] = Factory(provide_session, debug=debug, engine=engine)


class StorageContainer(DeclarativeContainer):
    config: Provider[StorageSettings] = Configuration(strict=True)
    secrets: Provider[StorageSecrets] = Configuration(strict=True)
    debug: Provider[bool] = Object()
    logging: Provider[LoggingProvider] = Resource()
    root: Provider[Path | NotReady] = Object()
    utcnow: Provider[TimestampProvider] = Object()

    persistent: Provider[PersistentContainer] = Container(
        PersistentContainer, config=config.persistent, secrets=secrets, debug=debug, logging=logging, root=root
    )

    serializers: Provider[SerializerRegistry] = Singleton(provide_serializers)
    executor: Provider[Executor] = Factory(Executor, session=persistent.provided.session.call())

    organization: Provider[OrganizationRepository] = Factory(
        OrganizationRepository, executor=executor, serializers=serializers
    )
    lifecycle: Provider[OrganizationLifecycleManager] = Factory(
        OrganizationLifecycleManager, executor=executor, serializers=serializers
    )
    credential: Provider[CredentialRepository] = Factory(
        CredentialRepository, executor=executor, serializers=serializers, utcnow=utcnow
    )
    follower: Provider[FollowerRepository] = Factory(
        FollowerRepository, executor=executor, serializers=serializers, utcnow=utcnow
    )
    inbox: Provider[InboxRepository] = Factory(
        InboxRepository,
        executor=executor,
        serializers=serializers,
        utcnow=utcnow,
        default_lifetime=config.retention.inbox.as_(LengthOfTime.model_validate),
    )
    preferences: Provider[UserPreferencesRepository] = Factory(
        UserPreferencesRepository, executor=executor, serializers=serializers
    )
    message: Provider[MessageRepository] = Factory(
        MessageRepository, executor=executor, serializers=serializers, utcnow=utcnow
    )


def register_sqlite_pragmas(dbapi_conn: t.Any, _: t.Any) -> None:
    # autocommit at the driver level; begin_sqlite_transaction emits BEGIN instead
    dbapi_conn.isolation_level = None
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def begin_sqlite_transaction(conn: sqlalchemy.Connection) -> None:
    conn.exec_driver_sql("BEGIN")


def register_timezone(dbapi_conn: t.Any, _: t.Any) -> None:
    """Set connection timezone to UTC for consistent datetime handling.

    PostgreSQL TIMESTAMP WITH TIME ZONE stores timestamps in UTC but returns
    them converted to the connection's timezone.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("SET TIMEZONE TO 'UTC'")
    cursor.close()
