"""Run catalog statements against a session and report tagged outcomes.

The executor never raises for a database failure. Each call returns one of
`Ok`, `NotFound` or `ExecutionError`, and the repositories decide what the
caller sees.
"""

from __future__ import annotations

import contextlib
import dataclasses
import logging
import typing as t

import sqlalchemy.orm
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.sql import Executable

from beacon.core.logging import TRACE
from beacon.lib.sql import DebugSession

from .serializer import Serializer
from .statement import Catalog, Statement, StatementText, Upsert

T = t.TypeVar("T")

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Ok(t.Generic[T]):
    value: T


@dataclasses.dataclass(frozen=True)
class NotFound(object):
    pass


@dataclasses.dataclass(frozen=True)
class ExecutionError(object):
    cause: Exception


Outcome = t.Union[Ok[T], NotFound, ExecutionError]


class StatementError(Exception):
    """A transaction could not be opened or committed."""

    def __init__(self, cause: Exception):
        super().__init__(str(cause))
        self.cause = cause


class Executor(object):
    def __init__(self, session: sqlalchemy.orm.Session, catalog: t.Mapping[Statement, StatementText] = Catalog):
        self.session = session
        self.catalog = catalog

    def __enter__(self) -> Executor:
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    @contextlib.contextmanager
    def transaction(self) -> t.Generator[Executor]:
        """Share one database transaction between the statements issued inside.

        Nested use opens a savepoint. Failing to begin or commit raises
        `StatementError`; an exception from the body rolls back and propagates.
        """
        try:
            tx = self.session.begin_nested() if self.session.in_transaction() else self.session.begin()
        except SQLAlchemyError as ex:
            raise StatementError(ex) from ex

        try:
            yield self
        except BaseException:
            tx.rollback()
            raise

        try:
            tx.commit()
        except SQLAlchemyError as ex:
            tx.rollback()
            raise StatementError(ex) from ex

    def update(self, statement: Statement, **params: t.Any) -> Outcome[int]:
        """Execute an INSERT, UPDATE or DELETE, yielding the affected row count."""
        return self._run(statement, params, lambda result: t.cast(t.Any, result).rowcount)

    def query_for_object(self, statement: Statement, serializer: Serializer[T], **params: t.Any) -> Outcome[T]:
        return self._run(statement, params, lambda result: serializer.deserialize(result.mappings().one()))

    def query_for_scalar(self, statement: Statement, **params: t.Any) -> Outcome[t.Any]:
        return self._run(statement, params, lambda result: result.scalar_one())

    def query(self, statement: Statement, serializer: Serializer[T], **params: t.Any) -> Outcome[tuple[T, ...]]:
        return self._run(
            statement, params, lambda result: tuple(serializer.deserialize(row) for row in result.mappings())
        )

    def statement(self, statement: Statement) -> Executable:
        """The executable for `statement`, built for the session's dialect where that matters."""
        sql = self.catalog[statement]
        if isinstance(sql, Upsert):
            return sql.for_dialect(self.session.get_bind().dialect.name)
        return sql

    def _run(
        self, statement: Statement, params: dict[str, t.Any], consume: t.Callable[[sqlalchemy.Result[t.Any]], T]
    ) -> Outcome[T]:
        sql = self.statement(statement)
        if isinstance(self.session, DebugSession) and logger.isEnabledFor(TRACE):
            logger.log(TRACE, self.session.format_statement(sql, params), extra={"statement": statement.name})

        try:
            with self._unit():
                return Ok(consume(self.session.execute(sql, params)))
        except NoResultFound:
            return NotFound()
        except (SQLAlchemyError, ValueError) as ex:
            logger.error(
                "statement failed",
                exc_info=ex,
                extra={
                    "statement": statement.name,
                    "params": sorted(params),
                },
            )
            return ExecutionError(ex)

    def _unit(self) -> t.ContextManager[t.Any]:
        # statements outside transaction() each get a short transaction of their own
        if self.session.in_transaction():
            return contextlib.nullcontext()
        return self.session.begin()
