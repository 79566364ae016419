"""Tests for the identifier fields shared by the beacon models."""

from __future__ import annotations

import beacon.lib.uuid as uuid
from beacon.model import Application, Organization


def new_id() -> str:
    return str(uuid.uuid4())


class TestIdentifiers(object):
    def test_id_is_canonical(self) -> None:
        org_id = new_id()

        assert Organization(organization_id=f" {org_id.upper()} ").organization_id == org_id

    def test_malformed_id_kept(self) -> None:
        assert Organization(organization_id="acme").organization_id == "acme"

    def test_optional_id(self) -> None:
        org_id = new_id()

        assert Application(application_id=new_id()).organization_id is None
        assert Application(application_id=new_id(), organization_id=org_id.upper()).organization_id == org_id

    def test_owners_sorted_once_each(self) -> None:
        a, b = sorted([new_id(), new_id()])

        org = Organization(organization_id=new_id(), owners=[b, a.upper(), a])

        assert org.owners == [a, b]

    def test_equal_regardless_of_owner_order(self) -> None:
        org_id, a, b = new_id(), new_id(), new_id()

        assert Organization(organization_id=org_id, owners=[a, b]) == Organization(organization_id=org_id, owners=[b, a])
