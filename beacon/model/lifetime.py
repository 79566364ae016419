import datetime
import enum

import pydantic as p

from .base import BaseModel


class TimeUnit(enum.Enum):
    Millis = "millis"
    Seconds = "seconds"
    Minutes = "minutes"
    Hours = "hours"
    Days = "days"
    Weeks = "weeks"


_Units: dict[TimeUnit, datetime.timedelta] = {
    TimeUnit.Millis: datetime.timedelta(milliseconds=1),
    TimeUnit.Seconds: datetime.timedelta(seconds=1),
    TimeUnit.Minutes: datetime.timedelta(minutes=1),
    TimeUnit.Hours: datetime.timedelta(hours=1),
    TimeUnit.Days: datetime.timedelta(days=1),
    TimeUnit.Weeks: datetime.timedelta(weeks=1),
}


class LengthOfTime(BaseModel):
    model_config = p.ConfigDict(frozen=True)

    value: p.PositiveInt
    unit: TimeUnit

    def to_timedelta(self) -> datetime.timedelta:
        return self.value * _Units[self.unit]
