"""Alembic migrations for the beacon tables, run against the configured database."""

from __future__ import annotations

import alembic.command
import alembic.config

import beacon.lib.cli as click
from beacon.core import di

AlembicConfig = di.Provide["storage.persistent.alembic_config"]


@click.group("schema")
def schema():
    """Inspect and migrate the database schema."""


@schema.command()
@click.option("--verbose", "-v", is_flag=True, default=False)
@di.inject
def current(verbose: bool, alembic_conf: alembic.config.Config = AlembicConfig):
    """Show the revision the database is at."""
    alembic.command.current(alembic_conf, verbose=verbose)


@schema.command()
@click.argument("message")
@click.option("--autogenerate/--empty", default=True, help="Diff beacon.storage.table against the database")
@di.inject
def generate(message: str, autogenerate: bool, alembic_conf: alembic.config.Config = AlembicConfig):
    """Write a new revision named MESSAGE."""
    alembic.command.revision(alembic_conf, message, autogenerate=autogenerate)


@schema.command()
@click.argument("revision", default="head")
@di.inject
def up(revision: str, alembic_conf: alembic.config.Config = AlembicConfig):
    """Upgrade to REVISION, the newest one unless given."""
    alembic.command.upgrade(alembic_conf, revision)


@schema.command()
@click.argument("revision", default="-1")
@di.inject
def down(revision: str, alembic_conf: alembic.config.Config = AlembicConfig):
    """Downgrade to REVISION, one step back unless given."""
    alembic.command.downgrade(alembic_conf, revision)


@schema.command()
@click.option("--verbose", "-v", is_flag=True, default=False)
@di.inject
def history(verbose: bool, alembic_conf: alembic.config.Config = AlembicConfig):
    """List every revision, marking the current one."""
    alembic.command.history(alembic_conf, verbose=verbose, indicate_current=True)


@schema.command()
@click.argument("revision", default="head")
@di.inject
def stamp(revision: str, alembic_conf: alembic.config.Config = AlembicConfig):
    """Record REVISION as applied without running it, the newest one unless given."""
    alembic.command.stamp(alembic_conf, revision)
