from __future__ import annotations

from beacon.core.provider import TimestampProvider
from beacon.model import Application, User

from . import validate
from .executor import Executor
from .repository import Repository
from .serializer import SerializerRegistry
from .statement import Deletes, Inserts, Queries


class FollowerRepository(Repository):
    """Which users follow which applications."""

    def __init__(self, executor: Executor, serializers: SerializerRegistry, utcnow: TimestampProvider):
        super().__init__(executor, serializers)
        self.utcnow = utcnow

    def save_following(self, user: User, application: Application) -> None:
        user_id = validate.user(user)
        application_id = validate.application(application)
        self.expect(
            self.executor.update(
                Inserts.FOLLOWING, application_id=application_id, user_id=user_id, time_of_follow=self.utcnow()
            ),
            "could not save following",
        )

    def delete_following(self, user_id: str, application_id: str) -> None:
        user_id = validate.uuid(user_id, "user_id")
        application_id = validate.uuid(application_id, "application_id")
        self.expect(
            self.executor.update(Deletes.FOLLOWING, application_id=application_id, user_id=user_id),
            "could not delete following",
        )

    def following_exists(self, user_id: str, application_id: str) -> bool:
        user_id = validate.uuid(user_id, "user_id")
        application_id = validate.uuid(application_id, "application_id")
        return self.expect_flag(
            self.executor.query_for_scalar(
                Queries.CHECK_FOLLOWING_EXISTS, application_id=application_id, user_id=user_id
            ),
            "could not check following",
        )

    def get_applications_followed_by(self, user_id: str) -> tuple[Application, ...]:
        user_id = validate.uuid(user_id, "user_id")
        return self.expect(
            self.executor.query(Queries.SELECT_APPS_FOLLOWED_BY_USER, self.serializers[Application], user_id=user_id),
            "could not get followed applications",
        )

    def get_application_followers(self, application_id: str) -> tuple[User, ...]:
        application_id = validate.uuid(application_id, "application_id")
        return self.expect(
            self.executor.query(Queries.SELECT_APP_FOLLOWERS, self.serializers[User], application_id=application_id),
            "could not get application followers",
        )
