from __future__ import annotations

import logging
import typing as t

from beacon.lib.util import like_pattern
from beacon.model import Organization, User

from . import validate
from .errors import OperationFailedError
from .executor import ExecutionError, Executor, Ok, StatementError
from .repository import Repository
from .serializer import SerializerRegistry
from .statement import Deletes, Inserts, Queries

logger = logging.getLogger(__name__)


class OrganizationRepository(Repository):
    def save(self, organization: Organization) -> None:
        """Upsert the organization row and link each of its owners, in one transaction."""
        org_id = validate.organization(organization)
        params = self.serializers[Organization].serialize(organization)
        try:
            with self.executor.transaction():
                self.expect(self.executor.update(Inserts.ORGANIZATION, **params), "could not save organization")
                for owner in organization.owners:
                    self.expect(
                        self.executor.update(
                            Inserts.ORGANIZATION_OWNER, organization_id=org_id, user_id=validate.uuid(owner, "owner")
                        ),
                        "could not save organization owner",
                    )
        except StatementError as ex:
            raise OperationFailedError(f"could not save organization | {ex}") from ex.cause

    def get(self, organization_id: str) -> Organization:
        org_id = validate.uuid(organization_id, "organization_id")
        organization = self.expect(
            self.executor.query_for_object(
                Queries.SELECT_ORGANIZATION, self.serializers[Organization], organization_id=org_id
            ),
            f"organization not found: {org_id}",
        )
        owners = self.expect(
            self.executor.query(Queries.SELECT_ORGANIZATION_OWNER_IDS, _UserIds(), organization_id=org_id),
            "could not get organization owners",
        )
        return organization.model_copy(update={"owners": list(owners)})

    def contains(self, organization_id: str) -> bool:
        org_id = validate.uuid(organization_id, "organization_id")
        return self.expect_flag(
            self.executor.query_for_scalar(Queries.CHECK_ORGANIZATION, organization_id=org_id),
            "could not check organization",
        )

    def search_by_name(self, term: str) -> tuple[Organization, ...]:
        """Case-insensitive substring search on the organization name.

        A database failure is logged and yields no results.
        """
        validate.non_empty(term, "term")
        match self.executor.query(
            Queries.SEARCH_ORGANIZATION_BY_NAME, self.serializers[Organization], term=like_pattern(term)
        ):
            case Ok(organizations):
                return organizations
            case ExecutionError(cause):
                logger.warning("organization search failed", exc_info=cause, extra={"term": term})
                return ()
            case _:
                return ()

    def get_owners(self, organization_id: str) -> tuple[User, ...]:
        org_id = validate.uuid(organization_id, "organization_id")
        return self.expect(
            self.executor.query(Queries.SELECT_ORGANIZATION_OWNERS, self.serializers[User], organization_id=org_id),
            "could not get organization owners",
        )

    def save_owner(self, organization_id: str, user: User) -> None:
        org_id = validate.uuid(organization_id, "organization_id")
        user_id = validate.user(user)
        self.expect(
            self.executor.update(Inserts.ORGANIZATION_OWNER, organization_id=org_id, user_id=user_id),
            "could not save organization owner",
        )

    def save_member(self, organization_id: str, user: User) -> None:
        org_id = validate.uuid(organization_id, "organization_id")
        validate.user(user)
        member = self.serializers[User].serialize(user)
        self.expect(
            self.executor.update(
                Inserts.ORGANIZATION_MEMBER,
                organization_id=org_id,
                user_id=member["user_id"],
                user_first_name=member["first_name"],
                user_middle_name=member["middle_name"],
                user_last_name=member["last_name"],
                user_email=member["email"],
                user_roles=member["roles"],
            ),
            "could not save organization member",
        )

    def is_member(self, organization_id: str, user_id: str) -> bool:
        org_id = validate.uuid(organization_id, "organization_id")
        user_id = validate.uuid(user_id, "user_id")
        return self.expect_flag(
            self.executor.query_for_scalar(
                Queries.CHECK_ORGANIZATION_HAS_MEMBER, organization_id=org_id, user_id=user_id
            ),
            "could not check organization membership",
        )

    def get_members(self, organization_id: str) -> tuple[User, ...]:
        org_id = validate.uuid(organization_id, "organization_id")
        return self.expect(
            self.executor.query(Queries.SELECT_ORGANIZATION_MEMBERS, self.serializers[User], organization_id=org_id),
            "could not get organization members",
        )

    def delete_member(self, organization_id: str, user_id: str) -> None:
        org_id = validate.uuid(organization_id, "organization_id")
        user_id = validate.uuid(user_id, "user_id")
        self.expect(
            self.executor.update(Deletes.ORGANIZATION_MEMBER, organization_id=org_id, user_id=user_id),
            "could not delete organization member",
        )

    def delete_all_members(self, organization_id: str) -> None:
        org_id = validate.uuid(organization_id, "organization_id")
        self.expect(
            self.executor.update(Deletes.ORGANIZATION_ALL_MEMBERS, organization_id=org_id),
            "could not delete organization members",
        )


class OrganizationLifecycleManager(object):
    """Deletes an organization together with its owner and member links.

    The aggregate is read before anything is deleted. If the delete sequence
    fails, the snapshot is written back once through idempotent upserts and the
    failure is reported as `OperationFailedError`.
    """

    DeleteSequence: t.Final[tuple[Deletes, ...]] = (
        Deletes.ORGANIZATION_ALL_MEMBERS,
        Deletes.ORGANIZATION_ALL_OWNERS,
        Deletes.ORGANIZATION,
    )

    def __init__(self, executor: Executor, serializers: SerializerRegistry):
        self.executor = executor
        self.repository = OrganizationRepository(executor, serializers)

    def delete(self, organization_id: str) -> None:
        org_id = validate.uuid(organization_id, "organization_id")

        organization = self.repository.get(org_id)
        owners = self.repository.get_owners(org_id)
        members = self.repository.get_members(org_id)

        try:
            with self.executor.transaction():
                for statement in self.DeleteSequence:
                    outcome = self.executor.update(statement, organization_id=org_id)
                    if isinstance(outcome, ExecutionError):
                        raise StatementError(outcome.cause)
        except StatementError as ex:
            logger.error(
                "organization delete failed, restoring snapshot",
                exc_info=ex.cause,
                extra={
                    "organization_id": org_id,
                    "owners": len(owners),
                    "members": len(members),
                },
            )
            self.restore(organization, owners, members)
            raise OperationFailedError(f"could not delete organization {org_id} | {ex}") from ex.cause

        logger.info(
            "deleted organization",
            extra={
                "organization_id": org_id,
                "owners": len(owners),
                "members": len(members),
            },
        )

    def restore(self, organization: Organization, owners: t.Iterable[User], members: t.Iterable[User]) -> None:
        """Write a snapshot back; a failing write propagates as is."""
        org_id = organization.organization_id
        # owners are linked below, once each, with their user rows
        self.repository.save(organization.model_copy(update={"owners": []}))
        for member in members:
            self.repository.save_member(org_id, member)
        for owner in owners:
            self.repository.save_owner(org_id, owner)


class _UserIds(object):
    def serialize(self, obj: str) -> dict[str, t.Any]:
        return {"user_id": obj}

    def deserialize(self, row: t.Mapping[str, t.Any]) -> str:
        return row["user_id"]
