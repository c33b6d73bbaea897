"""Base class for meters."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class MeterSample(BaseModel):
    """A single reading taken from a meter."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the meter that produced the sample")
    unit: str = Field(..., description="Short unit symbol (e.g., 'ms', 'ticks')")
    value: float = Field(..., description="Raw reading in the meter's unit")


class Meter(ABC):
    """Abstract base class for all meters.

    A meter is read once before and once after a bench invocation; the
    difference of the two readings is the measured value. Meters are
    shared read-only across a run, so ``sample()`` must not depend on
    any other meter.

    Two meters are equal when they have the same name and unit,
    regardless of what they have read so far.
    """

    def __init__(self, name: str, unit: str, unit_description: str) -> None:
        self._name = name
        self._unit = unit
        self._unit_description = unit_description

    @property
    def name(self) -> str:
        """Meter name used as key in results."""
        return self._name

    @property
    def unit(self) -> str:
        """Short unit symbol."""
        return self._unit

    @property
    def unit_description(self) -> str:
        """Human-readable unit description."""
        return self._unit_description

    @abstractmethod
    def read(self) -> float:
        """
        Read the current value of the instrument.

        Returns:
            Current reading in this meter's unit
        """
        pass

    def sample(self) -> MeterSample:
        """Take one reading tagged with this meter's name and unit."""
        return MeterSample(name=self._name, unit=self._unit, value=self.read())

    def _identity(self) -> tuple[str, str]:
        return (self._name, self._unit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Meter):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, unit={self._unit!r})"
