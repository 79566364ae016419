from __future__ import annotations

from beacon.core.provider import TimestampProvider
from beacon.model import LengthOfTime, Message

from . import validate
from .executor import Executor
from .repository import Repository
from .serializer import SerializerRegistry
from .statement import Deletes, Inserts, Queries


class MessageRepository(Repository):
    """Messages sent by applications. Expired messages are invisible to every read."""

    def __init__(self, executor: Executor, serializers: SerializerRegistry, utcnow: TimestampProvider):
        super().__init__(executor, serializers)
        self.utcnow = utcnow

    def save_message(self, message: Message, lifetime: LengthOfTime | None = None) -> None:
        """Store a message; without a lifetime it never expires."""
        validate.message(message)
        expiration = self.utcnow() + lifetime.to_timedelta() if lifetime is not None else None
        self.expect(
            self.executor.update(
                Inserts.MESSAGE, time_of_expiration=expiration, **self.serializers[Message].serialize(message)
            ),
            "could not save message",
        )

    def get_message(self, application_id: str, message_id: str) -> Message:
        application_id = validate.uuid(application_id, "application_id")
        message_id = validate.uuid(message_id, "message_id")
        return self.expect(
            self.executor.query_for_object(
                Queries.SELECT_MESSAGE,
                self.serializers[Message],
                application_id=application_id,
                message_id=message_id,
                now=self.utcnow(),
            ),
            f"message not found: {message_id}",
        )

    def delete_message(self, application_id: str, message_id: str) -> None:
        application_id = validate.uuid(application_id, "application_id")
        message_id = validate.uuid(message_id, "message_id")
        self.expect(
            self.executor.update(Deletes.MESSAGE, application_id=application_id, message_id=message_id),
            "could not delete message",
        )

    def contains_message(self, application_id: str, message_id: str) -> bool:
        application_id = validate.uuid(application_id, "application_id")
        message_id = validate.uuid(message_id, "message_id")
        return self.expect_flag(
            self.executor.query_for_scalar(
                Queries.CHECK_MESSAGE, application_id=application_id, message_id=message_id, now=self.utcnow()
            ),
            "could not check message",
        )

    def get_by_hostname(self, hostname: str) -> tuple[Message, ...]:
        validate.non_empty(hostname, "hostname")
        return self.expect(
            self.executor.query(
                Queries.SELECT_MESSAGES_BY_HOSTNAME, self.serializers[Message], hostname=hostname, now=self.utcnow()
            ),
            "could not get messages by hostname",
        )

    def get_by_application(self, application_id: str) -> tuple[Message, ...]:
        application_id = validate.uuid(application_id, "application_id")
        return self.expect(
            self.executor.query(
                Queries.SELECT_MESSAGES_BY_APPLICATION,
                self.serializers[Message],
                application_id=application_id,
                now=self.utcnow(),
            ),
            "could not get messages by application",
        )

    def get_by_title(self, application_id: str, title: str) -> tuple[Message, ...]:
        application_id = validate.uuid(application_id, "application_id")
        validate.non_empty(title, "title")
        return self.expect(
            self.executor.query(
                Queries.SELECT_MESSAGES_BY_TITLE,
                self.serializers[Message],
                application_id=application_id,
                title=title,
                now=self.utcnow(),
            ),
            "could not get messages by title",
        )

    def get_count_by_application(self, application_id: str) -> int:
        application_id = validate.uuid(application_id, "application_id")
        return int(
            self.expect(
                self.executor.query_for_scalar(
                    Queries.COUNT_MESSAGES, application_id=application_id, now=self.utcnow()
                ),
                "could not count messages",
            )
        )
