from __future__ import annotations

import enum
import pathlib
import typing as t

import click
import pydantic as p
from click import *  # noqa: F401, F403 # pyright: ignore [reportWildcardImportFromLibrary]

import beacon.lib.uuid as uuid

# commands import this module as `click`; it adds the parameter types below


class EnumType(click.ParamType):
    """Accept the value of any member of `enum`."""

    def __init__(self, enum: type[enum.Enum]):
        self.enum = enum
        self.name = enum.__name__

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> enum.Enum:
        if isinstance(value, self.enum):
            return value
        try:
            return self.enum(value)
        except ValueError:
            choices = ", ".join(str(e.value) for e in self.enum)
            self.fail(f"{value!r} is not one of: {choices}", param, ctx)

    def __repr__(self) -> str:
        return self.name


class UUIDParamType(click.ParamType):
    name = "uuid"

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> uuid.UUID:
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.parse(value)
        except ValueError:
            self.fail(f"{value!r} is not a valid UUID", param, ctx)


class URIParamType(click.ParamType):
    """
    A URI, or a filesystem path which is promoted to a `file://` URI.

    File URIs must name an existing path; `dir_ok` decides whether that path
    may be a directory.
    """

    name = "URI OR PATH"

    def __init__(self, dir_ok: bool = False):
        self.dir_ok = dir_ok

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> p.AnyUrl:
        if isinstance(value, p.AnyUrl):
            return value
        if isinstance(value, pathlib.Path) or "://" not in value:
            value = f"file://{pathlib.Path(value).absolute()}"

        try:
            url = p.AnyUrl(value)
        except p.ValidationError:
            self.fail(f"{value!r} is not a valid URI", param, ctx)
        if url.scheme != "file":
            return url

        path = pathlib.Path(url.path or "")
        if not path.exists():
            self.fail(f"{path}: no such file or directory", param, ctx)
        if path.is_dir() and not self.dir_ok:
            self.fail(f"{path}: is a directory", param, ctx)
        return p.FileUrl(f"file://{path.absolute()}")
