from __future__ import annotations

import datetime
import enum
import functools
import json as pyjson
import typing as t
import uuid as pyuuid

import uuid_utils

JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]


def encode_isoformat(obj: datetime.date) -> str:
    return obj.isoformat()


def encode_enum(obj: enum.Enum) -> JSONValue:
    return obj.value


def encode_collection(obj: t.Iterable[t.Any]) -> list[t.Any]:
    return sorted(obj, key=str)


def encode_timedelta(obj: datetime.timedelta) -> float:
    return obj.total_seconds()


@functools.cache
def _encoder_map() -> dict[type, t.Callable[[t.Any], JSONValue]]:
    # datetime before date, datetime is a date subclass
    return {
        datetime.datetime: encode_isoformat,
        datetime.date: encode_isoformat,
        datetime.timedelta: encode_timedelta,
        enum.Enum: encode_enum,
        set: encode_collection,
        frozenset: encode_collection,
        uuid_utils.UUID: str,
        pyuuid.UUID: str,
    }


class JSONEncoder(pyjson.JSONEncoder):
    """Encodes the value types that appear in beacon records and log extras."""

    def get_encoders(self) -> dict[type, t.Callable[[t.Any], JSONValue]]:
        return _encoder_map()

    def default(self, o: t.Any) -> JSONValue:
        if hasattr(o, "model_dump"):
            return o.model_dump(mode="json")

        for tp, encoder in self.get_encoders().items():
            if isinstance(o, tp):
                return encoder(o)

        return super().default(o)


def dumps(obj: t.Any, *, cls: type[pyjson.JSONEncoder] = JSONEncoder, **kw: t.Any) -> str:
    return pyjson.dumps(obj, cls=cls, **kw)


def loads(s: str | bytes | bytearray, **kw: t.Any) -> t.Any:
    return pyjson.loads(s, **kw)
