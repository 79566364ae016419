import datetime
import inspect
import logging.config
import typing as t

from .logging import TRACE, TraceLogLevelLogger

TimestampProvider = t.Callable[..., datetime.datetime]


class LoggingProvider(object):
    """
    Applies a `logging.config.dictConfig` document and hands out loggers.
    Installing it also registers the TRACE level, which the storage layer
    uses for rendered SQL.
    """

    Module: t.Final[t.Literal["mod"]] = "mod"
    Class: t.Final[t.Literal["cls"]] = "cls"

    def __init__(self, config: dict[str, t.Any], debug: bool):
        LoggingProvider.install_trace_level()
        logging.config.dictConfig(config)
        logging.captureWarnings(debug)

    @staticmethod
    def install_trace_level() -> None:
        logging.setLoggerClass(TraceLogLevelLogger)
        logging.addLevelName(TRACE, "TRACE")

    @classmethod
    def get_logger(cls, scope: t.Literal["mod", "cls"] = "mod", name: str | None = None) -> TraceLogLevelLogger:
        """Logger named for `name`, or else for the calling module or the calling method's class."""
        if name is None:
            caller = inspect.stack()[1].frame
            match scope:
                case cls.Module:
                    name = caller.f_globals["__name__"]
                case cls.Class:
                    owner = caller.f_locals.get("self", caller.f_locals.get("cls"))
                    if owner is None:
                        raise RuntimeError("could not determine class")
                    kind = owner if isinstance(owner, type) else type(owner)
                    name = f"{kind.__module__}.{kind.__name__}"

        return t.cast(TraceLogLevelLogger, logging.getLogger(name))
