"""Tests for beacon.storage.validate."""

from __future__ import annotations

import pytest

import beacon.storage.validate as validate
from beacon.model import Organization
from beacon.storage.errors import InvalidArgumentError, StorageError

from conftest import new_id


class TestUUID(object):
    def test_canonical(self) -> None:
        value = new_id()

        assert validate.uuid(value.upper(), "id") == value
        assert validate.uuid(f"  {value} ", "id") == value

    @pytest.mark.parametrize("value", [None, "", " ", "xyz", 42, "123e4567-e89b-12d3-a456"])
    def test_rejects(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate.uuid(value, "organization_id")

        assert "organization_id" in str(exc_info.value)

    def test_error_hierarchy(self) -> None:
        with pytest.raises(StorageError):
            validate.uuid("bad", "id")
        with pytest.raises(ValueError):
            validate.uuid("bad", "id")


class TestOrganization(object):
    def test_returns_canonical_id(self) -> None:
        org_id = new_id()

        assert validate.organization(Organization(organization_id=org_id.upper(), organization_name="A")) == org_id
