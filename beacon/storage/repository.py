from __future__ import annotations

import typing as t

from .errors import NotFoundError, OperationFailedError
from .executor import ExecutionError, Executor, NotFound, Ok, Outcome
from .serializer import SerializerRegistry

T = t.TypeVar("T")


class Repository(object):
    """Shared plumbing for the repositories: an executor, the serializers and outcome handling."""

    def __init__(self, executor: Executor, serializers: SerializerRegistry):
        self.executor = executor
        self.serializers = serializers

    @staticmethod
    def expect(outcome: Outcome[T], message: str) -> T:
        """Unwrap an outcome, raising the storage error that matches a failure."""
        match outcome:
            case Ok(value):
                return value
            case NotFound():
                raise NotFoundError(message)
            case ExecutionError(cause):
                raise OperationFailedError(f"{message} | {cause}") from cause
            case _:
                raise TypeError(f"unexpected outcome: {outcome!r}")

    @classmethod
    def expect_flag(cls, outcome: Outcome[t.Any], message: str) -> bool:
        return bool(cls.expect(outcome, message))
