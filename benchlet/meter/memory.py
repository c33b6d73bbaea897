"""Process memory meter."""

from enum import Enum

import psutil

from benchlet.meter.base import Meter


class MemoryUnit(Enum):
    """Memory units supported by MemoryMeter."""

    BYTES = "bytes"
    KIBIBYTES = "kibibytes"
    MEBIBYTES = "mebibytes"
    GIBIBYTES = "gibibytes"

    @property
    def symbol(self) -> str:
        """Short unit symbol."""
        return {
            MemoryUnit.BYTES: "B",
            MemoryUnit.KIBIBYTES: "KiB",
            MemoryUnit.MEBIBYTES: "MiB",
            MemoryUnit.GIBIBYTES: "GiB",
        }[self]

    @property
    def size(self) -> int:
        """Number of bytes in one unit."""
        return {
            MemoryUnit.BYTES: 1,
            MemoryUnit.KIBIBYTES: 1024,
            MemoryUnit.MEBIBYTES: 1024**2,
            MemoryUnit.GIBIBYTES: 1024**3,
        }[self]


class MemoryMeter(Meter):
    """Reads the resident set size of the current process.

    The measured value of an invocation is the change in RSS across it and
    may be negative when memory is released.
    """

    def __init__(self, memory_unit: MemoryUnit = MemoryUnit.KIBIBYTES) -> None:
        super().__init__("MemoryMeter", memory_unit.symbol, memory_unit.value)
        self.memory_unit = memory_unit
        self._process = psutil.Process()

    def read(self) -> float:
        return self._process.memory_info().rss / self.memory_unit.size
