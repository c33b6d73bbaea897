"""Meters measuring a unit of work.

This module provides:
- Meter: Base class for all meters
- TimeMeter: Elapsed wall-clock time
- CountingMeter: Invocation counter
- MemoryMeter: Resident memory of the current process
"""

from benchlet.meter.base import Meter, MeterSample
from benchlet.meter.counting import CountingMeter
from benchlet.meter.memory import MemoryMeter, MemoryUnit
from benchlet.meter.timer import TimeMeter, TimeUnit

__all__ = [
    "CountingMeter",
    "MemoryMeter",
    "MemoryUnit",
    "Meter",
    "MeterSample",
    "TimeMeter",
    "TimeUnit",
]
