"""Tests for beacon.storage.credential."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from beacon.storage.credential import CredentialRepository
from beacon.storage.errors import InvalidArgumentError, NotFoundError, OperationFailedError
from beacon.storage.serializer import SerializerRegistry
from beacon.storage.statement import Inserts

from conftest import Clock, FailingExecutor, new_id, RecordingExecutor

Encrypted = "$2b$12$abcdefghijklmnopqrstuv"


class TestCredentialRepository(object):
    def test_save_and_get(self, credential_repository: CredentialRepository) -> None:
        user_id = new_id()

        credential_repository.save_encrypted_password(user_id, Encrypted)

        assert credential_repository.contains_encrypted_password(user_id)
        assert credential_repository.get_encrypted_password(user_id) == Encrypted

    def test_save_replaces(self, credential_repository: CredentialRepository) -> None:
        user_id = new_id()
        credential_repository.save_encrypted_password(user_id, "first")
        credential_repository.save_encrypted_password(user_id, "second")

        assert credential_repository.get_encrypted_password(user_id) == "second"

    def test_get_missing(self, credential_repository: CredentialRepository) -> None:
        with pytest.raises(NotFoundError):
            credential_repository.get_encrypted_password(new_id())

    def test_delete(self, credential_repository: CredentialRepository) -> None:
        user_id = new_id()
        credential_repository.save_encrypted_password(user_id, Encrypted)

        credential_repository.delete_encrypted_password(user_id)

        assert not credential_repository.contains_encrypted_password(user_id)

    @pytest.mark.parametrize("password", ["", "   ", None])
    def test_blank_password(
        self, password: str, credential_repository: CredentialRepository, executor: RecordingExecutor
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            credential_repository.save_encrypted_password(new_id(), password)

        assert executor.executed == []

    def test_bad_user_id(self, credential_repository: CredentialRepository) -> None:
        with pytest.raises(InvalidArgumentError):
            credential_repository.contains_encrypted_password("user-1")

    def test_save_failure(self, db_session: Session, serializers: SerializerRegistry, clock: Clock) -> None:
        repository = CredentialRepository(
            FailingExecutor(db_session, Inserts.ENCRYPTED_PASSWORD), serializers, utcnow=clock
        )

        with pytest.raises(OperationFailedError):
            repository.save_encrypted_password(new_id(), Encrypted)
