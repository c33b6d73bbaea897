"""Meter counting how often it has been read."""

import threading

from benchlet.meter.base import Meter


class CountingMeter(Meter):
    """Monotonically increasing counter.

    Each reading advances the counter by one, so the difference between the
    reading before and after an invocation is always 1: summed over a
    method result it yields the number of invocations.

    The counter is kept per thread. Classes running in parallel share the
    meter, and their readings must not land inside each other's windows.
    """

    def __init__(
        self,
        name: str = "CountingMeter",
        unit: str = "ticks",
        unit_description: str = "invocations",
    ) -> None:
        super().__init__(name, unit, unit_description)
        self._local = threading.local()

    def tick(self) -> int:
        """Advance the calling thread's counter and return the new value."""
        value = self.value + 1
        self._local.value = value
        return value

    @property
    def value(self) -> int:
        """Last value returned by tick() in the calling thread."""
        value: int = getattr(self._local, "value", 0)
        return value

    def read(self) -> float:
        return float(self.tick())
