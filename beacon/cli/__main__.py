from __future__ import annotations

import importlib
import sys
import traceback
import typing as t
from pathlib import Path

import pydantic as p

import beacon
import beacon.lib.cli as click
from beacon.core import BeaconContainer
from beacon.model import DeploymentEnvironment

ConfigRoot = Path(beacon.__file__).resolve().parents[1] / "config"


class BeaconMultiCommand(click.Group):
    """Top-level group whose subcommands are modules of `beacon.cli`, imported on demand."""

    Commands: t.ClassVar[tuple[str, ...]] = ("organization", "schema")

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.Commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.Commands:
            return None
        return getattr(importlib.import_module(f"beacon.cli.{cmd_name}"), cmd_name)


@click.group(cls=BeaconMultiCommand)
@click.option("-E", "--env", default=DeploymentEnvironment.Local.value, type=click.EnumType(DeploymentEnvironment))
@click.option("-c", "--config-root", default=ConfigRoot, type=click.URIParamType(dir_ok=True))
@click.option("-s", "--secrets-path", default=None, type=click.URIParamType(dir_ok=True))
@click.option(
    "-o",
    "--override",
    multiple=True,
    help="override a configuration value, e.g., -o storage.retention.inbox.value=7",
)
@click.option("-D", "--debug", is_flag=True, default=False)
@click.version_option(beacon.__version__)
@click.pass_obj
def main(
    ct: BeaconContainer,
    env: DeploymentEnvironment,
    config_root: p.FileUrl,
    secrets_path: p.FileUrl | None,
    override: tuple[str, ...],
    debug: bool,
):
    BeaconContainer.boot(
        ct,
        debug=debug,
        env=env,
        config_root=config_root,
        secrets_path=secrets_path,
        override=override,
    )


def execute_command(*_args: str) -> None:
    args = list(_args or sys.argv)
    prog = Path(args[0]).name
    container = BeaconContainer()

    try:
        with main.make_context(prog, args=args[1:]) as ctx:
            ctx.obj = container
            sys.exit(t.cast(int | None, main.invoke(ctx)))
    except (EOFError, KeyboardInterrupt, click.Abort):
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except click.exceptions.Exit as ex:
        sys.exit(ex.exit_code)
    except click.ClickException as ex:
        ex.show()
        sys.exit(ex.exit_code)
    except Exception as ex:
        click.echo(click.style("ERROR ", fg="red") + str(ex), err=True)
        if "-D" in args or "--debug" in args:
            traceback.print_exc()
        sys.exit(-1)
    finally:
        container.shutdown_resources()


if __name__ == "__main__":
    execute_command(*sys.argv)
