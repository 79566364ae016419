from __future__ import annotations

from beacon.core.provider import TimestampProvider

from . import validate
from .executor import Executor
from .repository import Repository
from .serializer import SerializerRegistry
from .statement import Deletes, Inserts, Queries


class CredentialRepository(Repository):
    """Stores already-encrypted passwords, one per user."""

    def __init__(self, executor: Executor, serializers: SerializerRegistry, utcnow: TimestampProvider):
        super().__init__(executor, serializers)
        self.utcnow = utcnow

    def save_encrypted_password(self, user_id: str, encrypted_password: str) -> None:
        user_id = validate.uuid(user_id, "user_id")
        validate.non_empty(encrypted_password, "encrypted_password")
        self.expect(
            self.executor.update(
                Inserts.ENCRYPTED_PASSWORD,
                user_id=user_id,
                encrypted_password=encrypted_password,
                time_created=self.utcnow(),
            ),
            "could not save password",
        )

    def contains_encrypted_password(self, user_id: str) -> bool:
        user_id = validate.uuid(user_id, "user_id")
        return self.expect_flag(
            self.executor.query_for_scalar(Queries.CHECK_ENCRYPTED_PASSWORD, user_id=user_id),
            "could not check for password",
        )

    def get_encrypted_password(self, user_id: str) -> str:
        user_id = validate.uuid(user_id, "user_id")
        return self.expect(
            self.executor.query_for_scalar(Queries.SELECT_ENCRYPTED_PASSWORD, user_id=user_id),
            f"no password stored for user {user_id}",
        )

    def delete_encrypted_password(self, user_id: str) -> None:
        user_id = validate.uuid(user_id, "user_id")
        self.expect(
            self.executor.update(Deletes.ENCRYPTED_PASSWORD, user_id=user_id),
            "could not delete password",
        )
