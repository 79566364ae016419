from __future__ import annotations

import typing as t

from beacon.model import MobileDevice

from . import validate
from .errors import OperationFailedError
from .executor import StatementError
from .repository import Repository
from .statement import Deletes, Inserts, Queries


class UserPreferencesRepository(Repository):
    """Mobile devices registered for push notifications, one row per device."""

    def save_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        user_id = validate.uuid(user_id, "user_id")
        validate.device(device)
        self.expect(
            self.executor.update(
                Inserts.USER_DEVICE, user_id=user_id, **self.serializers[MobileDevice].serialize(device)
            ),
            "could not save mobile device",
        )

    def save_mobile_devices(self, user_id: str, devices: t.Iterable[MobileDevice]) -> None:
        """Replace the user's registered devices with `devices`."""
        user_id = validate.uuid(user_id, "user_id")
        devices = [validate.device(d) for d in devices]
        serializer = self.serializers[MobileDevice]
        try:
            with self.executor.transaction():
                self.expect(
                    self.executor.update(Deletes.USER_ALL_DEVICES, user_id=user_id),
                    "could not clear mobile devices",
                )
                for device in devices:
                    self.expect(
                        self.executor.update(Inserts.USER_DEVICE, user_id=user_id, **serializer.serialize(device)),
                        "could not save mobile device",
                    )
        except StatementError as ex:
            raise OperationFailedError(f"could not save mobile devices | {ex}") from ex.cause

    def get_mobile_devices(self, user_id: str) -> set[MobileDevice]:
        user_id = validate.uuid(user_id, "user_id")
        return set(
            self.expect(
                self.executor.query(Queries.SELECT_USER_DEVICES, self.serializers[MobileDevice], user_id=user_id),
                "could not get mobile devices",
            )
        )

    def delete_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        user_id = validate.uuid(user_id, "user_id")
        validate.device(device)
        self.expect(
            self.executor.update(
                Deletes.USER_DEVICE, user_id=user_id, **self.serializers[MobileDevice].serialize(device)
            ),
            "could not delete mobile device",
        )

    def delete_all_mobile_devices(self, user_id: str) -> None:
        user_id = validate.uuid(user_id, "user_id")
        self.expect(
            self.executor.update(Deletes.USER_ALL_DEVICES, user_id=user_id),
            "could not delete mobile devices",
        )
