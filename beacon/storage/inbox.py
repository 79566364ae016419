from __future__ import annotations

from beacon.core.provider import TimestampProvider
from beacon.model import LengthOfTime, Message, User

from . import validate
from .executor import Executor
from .repository import Repository
from .serializer import SerializerRegistry
from .statement import Deletes, Inserts, Queries


class InboxRepository(Repository):
    """Per-user copies of messages, each expiring after a lifetime."""

    def __init__(
        self,
        executor: Executor,
        serializers: SerializerRegistry,
        utcnow: TimestampProvider,
        default_lifetime: LengthOfTime,
    ):
        super().__init__(executor, serializers)
        self.utcnow = utcnow
        self.default_lifetime = default_lifetime

    def save_message_for_user(self, user: User, message: Message, lifetime: LengthOfTime | None = None) -> None:
        user_id = validate.user(user)
        validate.message(message)
        lifetime = lifetime or self.default_lifetime
        self.expect(
            self.executor.update(
                Inserts.INBOX_MESSAGE,
                user_id=user_id,
                time_of_expiration=self.utcnow() + lifetime.to_timedelta(),
                **self.serializers[Message].serialize(message),
            ),
            "could not save message to inbox",
        )

    def get_messages_for_user(self, user_id: str, application_id: str | None = None) -> tuple[Message, ...]:
        """Unexpired inbox messages, newest first, optionally only those from one application."""
        user_id = validate.uuid(user_id, "user_id")
        if application_id is not None:
            application_id = validate.uuid(application_id, "application_id")

        messages = self.expect(
            self.executor.query(
                Queries.SELECT_INBOX_MESSAGES_FOR_USER, self.serializers[Message], user_id=user_id, now=self.utcnow()
            ),
            "could not get inbox",
        )
        if application_id is None:
            return messages
        return tuple(m for m in messages if m.application_id == application_id)

    def contains_message_in_inbox(self, user_id: str, message: Message) -> bool:
        user_id = validate.uuid(user_id, "user_id")
        message_id = validate.message(message)
        return self.expect_flag(
            self.executor.query_for_scalar(
                Queries.CHECK_INBOX_MESSAGE, user_id=user_id, message_id=message_id, now=self.utcnow()
            ),
            "could not check inbox",
        )

    def delete_message_for_user(self, user_id: str, message_id: str) -> None:
        user_id = validate.uuid(user_id, "user_id")
        message_id = validate.uuid(message_id, "message_id")
        self.expect(
            self.executor.update(Deletes.INBOX_MESSAGE, user_id=user_id, message_id=message_id),
            "could not delete inbox message",
        )

    def delete_all_messages_for_user(self, user_id: str) -> None:
        user_id = validate.uuid(user_id, "user_id")
        self.expect(
            self.executor.update(Deletes.INBOX_ALL_MESSAGES, user_id=user_id),
            "could not clear inbox",
        )

    def count_inbox_for_user(self, user_id: str) -> int:
        user_id = validate.uuid(user_id, "user_id")
        return int(
            self.expect(
                self.executor.query_for_scalar(Queries.COUNT_INBOX_MESSAGES, user_id=user_id, now=self.utcnow()),
                "could not count inbox",
            )
        )
