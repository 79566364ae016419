"""Tests for beacon.storage.inbox."""

from __future__ import annotations

import datetime
import typing as t

import pytest
from sqlalchemy.orm import Session

from beacon.model import LengthOfTime, Message, TimeUnit, User
from beacon.storage.errors import InvalidArgumentError, OperationFailedError
from beacon.storage.inbox import InboxRepository
from beacon.storage.serializer import SerializerRegistry
from beacon.storage.statement import Queries

from conftest import Clock, FailingExecutor, new_id, RecordingExecutor


class TestSaveMessageForUser(object):
    def test_save_and_read(
        self,
        inbox_repository: InboxRepository,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        message = message_factory()

        inbox_repository.save_message_for_user(user, message)

        assert inbox_repository.get_messages_for_user(user.user_id) == (message,)
        assert inbox_repository.contains_message_in_inbox(user.user_id, message)
        assert inbox_repository.count_inbox_for_user(user.user_id) == 1

    def test_newest_first(
        self,
        inbox_repository: InboxRepository,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        older, newer = message_factory(), message_factory()

        inbox_repository.save_message_for_user(user, older)
        inbox_repository.save_message_for_user(user, newer)

        assert inbox_repository.get_messages_for_user(user.user_id) == (newer, older)

    def test_default_lifetime(
        self,
        inbox_repository: InboxRepository,
        clock: Clock,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        inbox_repository.save_message_for_user(user, message_factory())

        clock.advance(datetime.timedelta(days=3, seconds=-1))
        assert inbox_repository.count_inbox_for_user(user.user_id) == 1

        clock.advance(datetime.timedelta(seconds=1))
        assert inbox_repository.count_inbox_for_user(user.user_id) == 0

    def test_explicit_lifetime(
        self,
        inbox_repository: InboxRepository,
        clock: Clock,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        message = message_factory()
        inbox_repository.save_message_for_user(user, message, LengthOfTime(value=5, unit=TimeUnit.Minutes))

        clock.advance(datetime.timedelta(minutes=10))

        assert inbox_repository.get_messages_for_user(user.user_id) == ()
        assert not inbox_repository.contains_message_in_inbox(user.user_id, message)

    @pytest.mark.parametrize(
        "message",
        [
            None,
            Message(message_id="msg", application_id=new_id(), title="x"),
            Message(message_id=new_id(), application_id="app", title="x"),
            Message(message_id=new_id(), application_id=new_id(), title=""),
            Message(message_id=new_id(), application_id=new_id()),
        ],
    )
    def test_invalid_message(
        self,
        message: Message | None,
        inbox_repository: InboxRepository,
        executor: RecordingExecutor,
        user_factory: t.Callable[..., User],
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            inbox_repository.save_message_for_user(user_factory(), t.cast(Message, message))

        assert executor.executed == []


class TestReadInbox(object):
    def test_filter_by_application(
        self,
        inbox_repository: InboxRepository,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        app_id = new_id()
        mine, other = message_factory(application_id=app_id), message_factory()
        inbox_repository.save_message_for_user(user, mine)
        inbox_repository.save_message_for_user(user, other)

        assert inbox_repository.get_messages_for_user(user.user_id, app_id) == (mine,)
        assert inbox_repository.get_messages_for_user(user.user_id, app_id.upper()) == (mine,)

    def test_inboxes_are_separate(
        self,
        inbox_repository: InboxRepository,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        ann, bo = user_factory(first_name="Ann"), user_factory(first_name="Bo")
        inbox_repository.save_message_for_user(ann, message_factory())

        assert inbox_repository.get_messages_for_user(bo.user_id) == ()
        assert inbox_repository.count_inbox_for_user(bo.user_id) == 0

    def test_read_failure(self, db_session: Session, serializers: SerializerRegistry, clock: Clock) -> None:
        repository = InboxRepository(
            FailingExecutor(db_session, Queries.SELECT_INBOX_MESSAGES_FOR_USER),
            serializers,
            utcnow=clock,
            default_lifetime=LengthOfTime(value=1, unit=TimeUnit.Days),
        )

        with pytest.raises(OperationFailedError):
            repository.get_messages_for_user(new_id())


class TestDeleteInbox(object):
    def test_delete_message(
        self,
        inbox_repository: InboxRepository,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        keep, drop = message_factory(), message_factory()
        inbox_repository.save_message_for_user(user, keep)
        inbox_repository.save_message_for_user(user, drop)

        inbox_repository.delete_message_for_user(user.user_id, drop.message_id)

        assert inbox_repository.get_messages_for_user(user.user_id) == (keep,)

    def test_delete_all(
        self,
        inbox_repository: InboxRepository,
        user_factory: t.Callable[..., User],
        message_factory: t.Callable[..., Message],
    ) -> None:
        user = user_factory()
        for _ in range(3):
            inbox_repository.save_message_for_user(user, message_factory())

        inbox_repository.delete_all_messages_for_user(user.user_id)

        assert inbox_repository.count_inbox_for_user(user.user_id) == 0
