__all__ = [
    "InvalidArgumentError",
    "NotFoundError",
    "OperationFailedError",
    "StorageError",
]


class StorageError(Exception):
    """Base of every error raised across a repository boundary."""


class InvalidArgumentError(StorageError, ValueError):
    """An argument failed validation; nothing was sent to the database."""


class OperationFailedError(StorageError):
    """The database could not complete the operation, or a compensating write failed."""


class NotFoundError(OperationFailedError, LookupError):
    """A row the operation requires does not exist."""
