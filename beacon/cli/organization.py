"""CLI commands for inspecting and deleting organizations."""

from __future__ import annotations

import beacon.lib.cli as click
import beacon.lib.json as json
from beacon.core import di
from beacon.lib.uuid import UUID
from beacon.storage.errors import StorageError
from beacon.storage.organization import OrganizationLifecycleManager, OrganizationRepository


@click.group("organization")
def organization():
    """Look up and remove organizations."""


@organization.command("get")
@click.argument("organization_id", type=click.UUIDParamType())
@di.inject
def organization_get(
    organization_id: UUID,
    repository: OrganizationRepository = di.Provide["storage.organization"],
) -> None:
    """Print an organization, its owners and its members as JSON."""
    with repository.executor:
        try:
            org = repository.get(str(organization_id))
            members = repository.get_members(org.organization_id)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex

    document = {**org.model_dump(mode="json"), "members": [m.model_dump(mode="json") for m in members]}
    click.echo(json.dumps(document, indent=2))


@organization.command("search")
@click.argument("term")
@di.inject
def organization_search(
    term: str,
    repository: OrganizationRepository = di.Provide["storage.organization"],
) -> None:
    """List organizations whose name contains TERM."""
    with repository.executor:
        try:
            found = repository.search_by_name(term)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex

    for org in found:
        click.echo(f"{org.organization_id}  {org.organization_name}")
    if not found:
        click.echo("no organizations found", err=True)


@organization.command("delete")
@click.argument("organization_id", type=click.UUIDParamType())
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation")
@di.inject
def organization_delete(
    organization_id: UUID,
    yes: bool,
    manager: OrganizationLifecycleManager = di.Provide["storage.lifecycle"],
) -> None:
    """Delete an organization with all of its owner and member links."""
    if not yes:
        click.confirm(f"Delete organization {organization_id}?", abort=True)

    with manager.executor:
        try:
            manager.delete(str(organization_id))
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex
    click.echo(f"deleted organization {organization_id}")
