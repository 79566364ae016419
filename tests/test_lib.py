"""Tests for the helpers in beacon.lib."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

import click as pyclick
import pytest
from click.testing import CliRunner

import beacon.lib.cli as click
import beacon.lib.json as json
import beacon.lib.uuid as uuid
from beacon.cli.__main__ import main
from beacon.lib.logging import ExtraFormatter
from beacon.lib.util import deep_update, like_pattern
from beacon.model import DeploymentEnvironment, Role


def record(msg: str, **extra: object) -> logging.LogRecord:
    rec = logging.makeLogRecord({"name": "beacon.test", "levelno": logging.INFO, "levelname": "INFO", "msg": msg})
    rec.__dict__.update(extra)
    return rec


class TestExtraFormatter(object):
    def formatter(self) -> ExtraFormatter:
        return ExtraFormatter(base=logging.Formatter, format="%(levelname)s %(message)s", indent=False, no_color=True)

    def test_plain_record(self) -> None:
        assert self.formatter().format(record("hello")) == "INFO hello"

    def test_extra_appended_as_json(self) -> None:
        when = datetime.datetime(2026, 1, 1, tzinfo=datetime.UTC)
        out = self.formatter().format(record("saved", organization_id="abc", at=when))

        message, _, extra = out.partition(" {")
        assert message == "INFO saved"
        assert json.loads("{" + extra) == {"organization_id": "abc", "at": "2026-01-01T00:00:00+00:00"}

    def test_unencodable_extra_uses_repr(self) -> None:
        out = self.formatter().format(record("odd", thing=object()))

        assert "<object object at" in out

    def test_multiline_message_aligned(self) -> None:
        out = self.formatter().format(record("first\nsecond"))

        assert out == "INFO first\n     second"


class TestJSON(object):
    def test_encodes_record_values(self) -> None:
        ident = uuid.uuid4()
        document = {"id": ident, "roles": {Role.QA, Role.Developer}, "ttl": datetime.timedelta(minutes=1)}

        assert json.loads(json.dumps(document)) == {
            "id": str(ident),
            "roles": ["developer", "qa"],
            "ttl": 60.0,
        }

    def test_unknown_type_fails(self) -> None:
        with pytest.raises(TypeError):
            json.dumps({"thing": object()})


class TestUtil(object):
    def test_deep_update_merges_nested(self) -> None:
        base = {"storage": {"database": {"host": "db", "port": 5432}}}

        merged = deep_update(base, {"storage": {"database": {"port": 6432}}})

        assert merged == {"storage": {"database": {"host": "db", "port": 6432}}}
        assert base["storage"]["database"]["port"] == 5432

    def test_like_pattern_escapes_wildcards(self) -> None:
        assert like_pattern("50%_off") == "%50\\%\\_off%"


class TestParamTypes(object):
    def test_enum_type(self) -> None:
        assert click.EnumType(DeploymentEnvironment).convert("test", None, None) is DeploymentEnvironment.Test
        with pytest.raises(pyclick.BadParameter):
            click.EnumType(DeploymentEnvironment).convert("moon", None, None)

    def test_uuid_type(self) -> None:
        ident = str(uuid.uuid4())

        assert str(click.UUIDParamType().convert(ident.upper(), None, None)) == ident
        with pytest.raises(pyclick.BadParameter):
            click.UUIDParamType().convert("org-1", None, None)

    def test_uri_type_promotes_paths(self, tmp_path: Path) -> None:
        url = click.URIParamType(dir_ok=True).convert(str(tmp_path), None, None)

        assert url.scheme == "file"
        assert url.path == str(tmp_path.absolute())

    def test_uri_type_rejects_missing_and_directories(self, tmp_path: Path) -> None:
        with pytest.raises(pyclick.BadParameter):
            click.URIParamType().convert(str(tmp_path / "absent"), None, None)
        with pytest.raises(pyclick.BadParameter):
            click.URIParamType(dir_ok=False).convert(str(tmp_path), None, None)


class TestMain(object):
    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "organization" in result.output
        assert "schema" in result.output
