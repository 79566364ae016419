import logging
import string
import sys
import textwrap
import typing as t

import pygments
from pygments.formatters import Terminal256Formatter
from pygments.lexers.data import JsonLexer  # pyright: ignore [reportMissingTypeStubs]
from pygments.styles import get_style_by_name

from beacon.lib import json

# attributes every LogRecord carries; anything else arrived through `extra=`
ReservedKeys = frozenset(logging.makeLogRecord({}).__dict__) | {
    "asctime",
    "exception",
    "log_color",
    "message",
    "taskName",
}


class ExtraEncoder(json.JSONEncoder):
    """Never fails: values without an encoder are rendered with repr()."""

    def default(self, o: t.Any) -> json.JSONValue:
        try:
            return super().default(o)
        except TypeError:
            return repr(o)


class ExtraFormatter(logging.Formatter):
    """Render a record with its base formatter, then append `extra=` fields as JSON."""

    def __init__(
        self,
        base: type[logging.Formatter],
        format: str | None,
        datefmt: str | None = None,
        indent: bool | None = True,
        pyg_style: str = "monokai",
        style: t.Literal["%", "{", "$"] = "%",
        *,
        no_color: bool = False,
        **kwargs: t.Any,
    ):
        self.base = base(format, datefmt=datefmt, style=style, **kwargs)
        self.pyg_style = get_style_by_name(pyg_style)
        self.indent = bool(indent)
        self.no_color = no_color

    def _align(self, record: logging.LogRecord) -> None:
        # continuation lines of a multi-line message start under its first line
        msg = record.getMessage()
        formatted = self.base.format(record)
        width = sum(1 for c in formatted[: formatted.find(msg)] if c in string.printable)
        first, *rest = msg.splitlines()
        body = textwrap.indent("\n".join(rest), " " * width)
        record.msg = f"{first}\n{body}"
        record.args = None

    def extra(self, record: logging.LogRecord) -> dict[str, t.Any]:
        return {k: v for k, v in record.__dict__.items() if k not in ReservedKeys}

    def format(self, record: logging.LogRecord) -> str:
        if "\n" in record.getMessage():
            self._align(record)
        message = self.base.format(record)

        extra = self.extra(record)
        if not extra:
            return message

        js = json.dumps(extra, sort_keys=True, indent=(4 if self.indent else None), cls=ExtraEncoder)
        if not self.no_color and sys.stderr.isatty():
            hl = pygments.highlight  # pyright: ignore [reportUnknownMemberType, reportUnknownVariableType]
            js = hl(js, JsonLexer(), Terminal256Formatter(style=self.pyg_style), None)
        return f"{message} {js.strip()}"

    def __getattr__(self, name: str) -> t.Any:
        return getattr(self.base, name)
