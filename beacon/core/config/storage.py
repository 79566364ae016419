import typing as t

import pydantic as p

from beacon.model import LengthOfTime, TimeUnit

from .base import BaseSettings

Driver = t.Literal["postgresql+psycopg", "sqlite+pysqlite"]


class DatabaseSettings(BaseSettings):
    """Where the relational store lives.

    For `sqlite+pysqlite`, `database` is a file path or `:memory:`; host and
    port are ignored.
    """

    driver: Driver = "postgresql+psycopg"
    host: p.IPvAnyAddress | str | None = None
    port: int | None = 5432
    database: str

    @property
    def is_sqlite(self) -> bool:
        return self.driver.startswith("sqlite")


class PersistentSettings(BaseSettings):
    database: DatabaseSettings


class RetentionSettings(BaseSettings):
    """How long inbox entries live when the caller names no lifetime."""

    inbox: LengthOfTime = LengthOfTime(value=3, unit=TimeUnit.Days)


class StorageSettings(BaseSettings):
    persistent: PersistentSettings
    retention: RetentionSettings = p.Field(default_factory=RetentionSettings)
