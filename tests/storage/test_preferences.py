"""Tests for beacon.storage.preferences."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from beacon.model import AndroidDevice, IOSDevice, MobileDevice
from beacon.storage.errors import InvalidArgumentError, OperationFailedError
from beacon.storage.preferences import UserPreferencesRepository
from beacon.storage.serializer import SerializerRegistry
from beacon.storage.statement import Inserts

from conftest import FailingExecutor, new_id, RecordingExecutor

Phone = MobileDevice.ios("a1b2c3")
Tablet = MobileDevice.android("registration-42")


class TestMobileDevices(object):
    def test_save_and_get(self, preferences_repository: UserPreferencesRepository) -> None:
        user_id = new_id()

        preferences_repository.save_mobile_device(user_id, Phone)
        preferences_repository.save_mobile_device(user_id, Tablet)
        preferences_repository.save_mobile_device(user_id, MobileDevice.ios("a1b2c3"))

        assert preferences_repository.get_mobile_devices(user_id) == {Phone, Tablet}

    def test_save_devices_replaces(self, preferences_repository: UserPreferencesRepository) -> None:
        user_id = new_id()
        preferences_repository.save_mobile_device(user_id, Phone)

        preferences_repository.save_mobile_devices(user_id, [Tablet])

        assert preferences_repository.get_mobile_devices(user_id) == {Tablet}

    def test_save_devices_failure_keeps_old_set(
        self,
        db_session: Session,
        serializers: SerializerRegistry,
        preferences_repository: UserPreferencesRepository,
    ) -> None:
        user_id = new_id()
        preferences_repository.save_mobile_device(user_id, Phone)
        failing = UserPreferencesRepository(FailingExecutor(db_session, Inserts.USER_DEVICE), serializers)

        with pytest.raises(OperationFailedError):
            failing.save_mobile_devices(user_id, [Tablet])

        assert preferences_repository.get_mobile_devices(user_id) == {Phone}

    def test_delete_device(self, preferences_repository: UserPreferencesRepository) -> None:
        user_id = new_id()
        preferences_repository.save_mobile_devices(user_id, [Phone, Tablet])

        preferences_repository.delete_mobile_device(user_id, Phone)

        assert preferences_repository.get_mobile_devices(user_id) == {Tablet}

    def test_delete_all_devices(self, preferences_repository: UserPreferencesRepository) -> None:
        user_id = new_id()
        preferences_repository.save_mobile_devices(user_id, [Phone, Tablet])

        preferences_repository.delete_all_mobile_devices(user_id)

        assert preferences_repository.get_mobile_devices(user_id) == set()

    def test_no_devices(self, preferences_repository: UserPreferencesRepository) -> None:
        assert preferences_repository.get_mobile_devices(new_id()) == set()

    @pytest.mark.parametrize(
        "device",
        [
            None,
            MobileDevice(),
            MobileDevice.ios(""),
            MobileDevice(ios_device=IOSDevice(device_token="a"), android_device=AndroidDevice(registration_id="b")),
        ],
    )
    def test_invalid_device(
        self,
        device: MobileDevice,
        preferences_repository: UserPreferencesRepository,
        executor: RecordingExecutor,
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            preferences_repository.save_mobile_device(new_id(), device)
        with pytest.raises(InvalidArgumentError):
            preferences_repository.save_mobile_devices(new_id(), [Phone, device])

        assert executor.executed == []
