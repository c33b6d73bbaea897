"""Wall-clock meter backed by the monotonic performance counter."""

import time
from enum import Enum

from benchlet.meter.base import Meter


class TimeUnit(Enum):
    """Time units supported by TimeMeter."""

    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"

    @property
    def symbol(self) -> str:
        """Short unit symbol."""
        return _SYMBOLS[self]

    @property
    def nanoseconds(self) -> int:
        """Number of nanoseconds in one unit."""
        return _NANOS[self]


_SYMBOLS = {
    TimeUnit.NANOSECONDS: "ns",
    TimeUnit.MICROSECONDS: "us",
    TimeUnit.MILLISECONDS: "ms",
    TimeUnit.SECONDS: "s",
    TimeUnit.MINUTES: "min",
    TimeUnit.HOURS: "h",
}

_NANOS = {
    TimeUnit.NANOSECONDS: 1,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.MILLISECONDS: 1_000_000,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.MINUTES: 60 * 1_000_000_000,
    TimeUnit.HOURS: 3600 * 1_000_000_000,
}


class TimeMeter(Meter):
    """Measures elapsed wall-clock time in a configurable unit.

    Example:
        >>> meter = TimeMeter(TimeUnit.MILLISECONDS)
        >>> meter.unit
        'ms'
    """

    def __init__(self, time_unit: TimeUnit = TimeUnit.MILLISECONDS) -> None:
        super().__init__("TimeMeter", time_unit.symbol, time_unit.value)
        self.time_unit = time_unit

    def read(self) -> float:
        return time.perf_counter_ns() / self.time_unit.nanoseconds
