"""
TimeDelta Calculator
Converts the distance between two instants into whole days, hours and minutes
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


MS_PER_MINUTE = 60_000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


class TimeUnit(str, Enum):
    """Units shown on the board, in display order"""
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"


TIME_UNITS = (TimeUnit.DAY, TimeUnit.HOUR, TimeUnit.MINUTE)


@dataclass(frozen=True)
class Delta:
    """Remaining time split into whole units"""
    day: int
    hour: int
    minute: int

    def __getitem__(self, unit: TimeUnit) -> int:
        return getattr(self, unit.value)

    def as_dict(self) -> dict:
        return {unit.value: self[unit] for unit in TIME_UNITS}


def compute_delta(target: datetime, now: datetime) -> Delta:
    """
    Split ``target - now`` into days, hours and minutes.

    All three counts come from a single millisecond difference so they can
    never disagree with each other. Seconds are truncated.
    """
    diff_ms = (target - now) // timedelta(milliseconds=1)
    return Delta(
        day=diff_ms // MS_PER_DAY,
        hour=(diff_ms % MS_PER_DAY) // MS_PER_HOUR,
        minute=(diff_ms % MS_PER_HOUR) // MS_PER_MINUTE,
    )
