import typing as t

import sql_formatter.core
import sqlalchemy.orm
from sqlalchemy.exc import CompileError
from sqlalchemy.sql import Executable


class DebugSession(sqlalchemy.orm.Session):
    """Session able to render a statement, with its parameters inlined, as formatted SQL."""

    def format_statement(self, statement: Executable, params: t.Mapping[str, t.Any] | None = None) -> str:
        if params:
            statement = t.cast(t.Any, statement).params(**params)
        bind = self.get_bind()
        try:
            compiled = t.cast(t.Any, statement).compile(bind, compile_kwargs={"literal_binds": True})
        except (CompileError, NotImplementedError):
            # some bind types have no literal form, show the placeholders instead
            compiled = t.cast(t.Any, statement).compile(bind)
        return sql_formatter.core.format_sql(compiled.string)

    def format_query(self, q: sqlalchemy.orm.Query[t.Any]) -> str:
        return self.format_statement(q.statement)


class DebugQuery(sqlalchemy.orm.Query[t.Any]):
    def __str__(self) -> str:
        if isinstance(self.session, DebugSession):
            return self.session.format_query(self)
        return super().__str__()
