"""Result tree: run -> class -> method.

Executors are the only writers. Insertion of class and method results is
serialised by the run result's lock; appending values to a method result is
left to the single executor owning that class.

Usage:
    from benchlet.result import RunResult

    result = RunResult()
    ...  # run benchmarks
    for class_result in result.class_results:
        for method_result in class_result.method_results:
            print(method_result.name, method_result.values(time_meter))

    result.emit(sys.stdout, OutputFormat.TEXT)
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from enum import Enum
from io import StringIO
from typing import Any, TextIO

from benchlet.exceptions import BenchmarkError
from benchlet.meter.base import Meter
from benchlet.models.result_models import (
    ClassResultModel,
    ErrorModel,
    MeterModel,
    MeterValuesModel,
    MethodResultModel,
    RunMetadata,
    RunResultModel,
)


class OutputFormat(Enum):
    """Supported output formats for run results."""

    JSON = "json"
    YAML = "yaml"
    TEXT = "text"  # Human-readable text


class AbstractResult:
    """Behaviour shared by every level of the result tree."""

    def __init__(self, related_element: Any, meters: Iterable[Meter]) -> None:
        self._related_element = related_element
        self._meters: tuple[Meter, ...] = tuple(meters)

    @property
    def related_element(self) -> Any:
        """Run, class or function this result belongs to."""
        return self._related_element

    @property
    def registered_meters(self) -> tuple[Meter, ...]:
        """Meters measured at this level, in registration order."""
        return self._meters

    @property
    def name(self) -> str:
        return getattr(self._related_element, "__name__", str(self._related_element))

    def values(self, meter: Meter) -> list[float]:
        """All values collected for ``meter`` at or below this level."""
        raise NotImplementedError


class MethodResult(AbstractResult):
    """Values collected for one benchmark method."""

    def __init__(self, method: Callable[..., Any], meters: Iterable[Meter]) -> None:
        super().__init__(method, meters)
        self._values: dict[Meter, list[float]] = {meter: [] for meter in self._meters}
        self._invocations = 0
        self._failures = 0

    def add_data(self, meter: Meter, value: float) -> None:
        """Append one value for a registered meter.

        Raises:
            ValueError: If the meter is not registered on this result.
        """
        if meter not in self._values:
            raise ValueError(f"{meter!r} is not registered for {self.name}")
        self._values[meter].append(value)

    def record_invocation(self, measured: dict[Meter, float]) -> None:
        """Append the values of one successful invocation."""
        for meter, value in measured.items():
            self.add_data(meter, value)
        self._invocations += 1

    def record_failure(self) -> None:
        """Count an invocation that raised instead of completing."""
        self._failures += 1

    @property
    def invocations(self) -> int:
        """Number of successful invocations."""
        return self._invocations

    @property
    def failures(self) -> int:
        """Number of invocations that raised."""
        return self._failures

    def values(self, meter: Meter) -> list[float]:
        return list(self._values.get(meter, ()))

    def to_model(self) -> MethodResultModel:
        return MethodResultModel(
            name=self.name,
            invocations=self._invocations,
            failures=self._failures,
            values=[
                MeterValuesModel(meter=meter.name, unit=meter.unit, values=list(values))
                for meter, values in self._values.items()
            ],
        )


class ClassResult(AbstractResult):
    """Method results of one benchmarked class, in first-seen order."""

    def __init__(self, related_class: type, meters: Iterable[Meter]) -> None:
        super().__init__(related_class, meters)
        self._method_results: dict[Callable[..., Any], MethodResult] = {}

    def _find_or_create(self, method: Callable[..., Any]) -> MethodResult:
        # Caller holds the run result lock
        result = self._method_results.get(method)
        if result is None:
            result = MethodResult(method, self._meters)
            self._method_results[method] = result
        return result

    @property
    def method_results(self) -> list[MethodResult]:
        return list(self._method_results.values())

    def get_method_result(self, method: Callable[..., Any]) -> MethodResult | None:
        return self._method_results.get(method)

    def values(self, meter: Meter) -> list[float]:
        collected: list[float] = []
        for result in self.method_results:
            collected.extend(result.values(meter))
        return collected

    def to_model(self) -> ClassResultModel:
        cls = self._related_element
        return ClassResultModel(
            name=cls.__qualname__,
            module=cls.__module__,
            methods=[result.to_model() for result in self.method_results],
        )


class RunResult(AbstractResult):
    """Root of the result tree for one run.

    Holds at most one ClassResult per class, in first-seen order, plus every
    error recorded during the run.

    Example:
        >>> result = RunResult()
        >>> result.register_meters([TimeMeter()])
        >>> result.find_or_create_method_result(SortBench, SortBench.bench_sorted)
    """

    def __init__(self) -> None:
        super().__init__("run", ())
        self._class_results: dict[type, ClassResult] = {}
        self._errors: list[BenchmarkError] = []
        self._lock = threading.Lock()
        self._timestamp_start = datetime.now(UTC).isoformat()
        self._timestamp_end: str | None = None

    def register_meters(self, meters: Iterable[Meter]) -> None:
        """Set the meters measured during this run.

        Meters are compared as a set; re-registering them in another order
        keeps the first order.

        Raises:
            ValueError: If different meters were registered before.
        """
        meters = tuple(meters)
        with self._lock:
            if not self._meters:
                self._meters = meters
            elif set(self._meters) != set(meters):
                raise ValueError(
                    f"run result already registered {list(self._meters)}, "
                    f"cannot switch to {list(meters)}"
                )

    def find_or_create_class_result(self, related_class: type) -> ClassResult:
        """Return the ClassResult for ``related_class``, creating it once."""
        with self._lock:
            return self._class_result_locked(related_class)

    def find_or_create_method_result(
        self, related_class: type, method: Callable[..., Any]
    ) -> MethodResult:
        """Return the MethodResult for ``method`` of ``related_class``, creating it once."""
        with self._lock:
            return self._class_result_locked(related_class)._find_or_create(method)

    def _class_result_locked(self, related_class: type) -> ClassResult:
        result = self._class_results.get(related_class)
        if result is None:
            result = ClassResult(related_class, self._meters)
            self._class_results[related_class] = result
        return result

    def add_error(self, error: BenchmarkError) -> None:
        """Record an error raised while running a benchmark."""
        with self._lock:
            self._errors.append(error)

    @property
    def errors(self) -> list[BenchmarkError]:
        with self._lock:
            return list(self._errors)

    @property
    def class_results(self) -> list[ClassResult]:
        with self._lock:
            return list(self._class_results.values())

    def get_class_result(self, related_class: type) -> ClassResult | None:
        with self._lock:
            return self._class_results.get(related_class)

    def values(self, meter: Meter) -> list[float]:
        collected: list[float] = []
        for result in self.class_results:
            collected.extend(result.values(meter))
        return collected

    def finalize(self) -> None:
        """Mark the run as complete, setting the end timestamp."""
        self._timestamp_end = datetime.now(UTC).isoformat()

    def __len__(self) -> int:
        """Return number of class results."""
        return len(self._class_results)

    def __contains__(self, related_class: type) -> bool:
        return related_class in self._class_results

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_model(self) -> RunResultModel:
        """Convert the tree into pydantic models for serialization."""
        from benchlet import __version__

        return RunResultModel(
            metadata=RunMetadata(
                timestamp_start=self._timestamp_start,
                timestamp_end=self._timestamp_end,
                benchlet_version=__version__,
            ),
            meters=[
                MeterModel(
                    name=meter.name,
                    unit=meter.unit,
                    unit_description=meter.unit_description,
                )
                for meter in self._meters
            ],
            classes=[result.to_model() for result in self.class_results],
            errors=[
                ErrorModel(
                    location=error.location,
                    role=error.role.value,
                    error_type=type(error).__name__,
                    message=str(error),
                )
                for error in self.errors
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_model().model_dump()

    def emit(
        self,
        output: TextIO,
        format: OutputFormat = OutputFormat.TEXT,
        indent: int = 2,
    ) -> None:
        """Write the results to a stream.

        Raises:
            ValueError: If format is YAML and pyyaml is not installed.
        """
        if format == OutputFormat.JSON:
            content = self.to_model().model_dump_json(indent=indent)
        elif format == OutputFormat.YAML:
            content = self._to_yaml(indent)
        elif format == OutputFormat.TEXT:
            content = self._to_text()
        else:
            raise ValueError(f"Unknown format: {format}")

        output.write(content)
        if output is not sys.stdout and output is not sys.stderr:
            output.flush()

    def _to_yaml(self, indent: int) -> str:
        try:
            import yaml  # type: ignore[import-untyped, unused-ignore]
        except ImportError:
            raise ValueError(
                "YAML output requires pyyaml. Install with: pip install pyyaml"
            ) from None

        result: str = yaml.safe_dump(
            self.to_model().model_dump(mode="json"),
            indent=indent,
            default_flow_style=False,
            sort_keys=False,
        )
        return result

    def _to_text(self) -> str:
        model = self.to_model()
        output = StringIO()

        output.write("\n" + "=" * 60 + "\n")
        output.write("  BENCHLET RESULTS\n")
        output.write("=" * 60 + "\n\n")
        output.write(f"Started:  {model.metadata.timestamp_start}\n")
        output.write(f"Finished: {model.metadata.timestamp_end}\n")
        output.write(f"Version:  {model.metadata.benchlet_version}\n")
        meters = ", ".join(f"{m.name} [{m.unit}]" for m in model.meters)
        output.write(f"Meters:   {meters or '-'}\n\n")

        for class_model in model.classes:
            output.write(f"{class_model.module}.{class_model.name}\n")
            output.write("-" * 40 + "\n")
            for method_model in class_model.methods:
                output.write(
                    f"  {method_model.name}: {method_model.invocations} runs, "
                    f"{method_model.failures} failed\n"
                )
                for meter_values in method_model.values:
                    shown = ", ".join(f"{v:.3f}" for v in meter_values.values[:10])
                    if len(meter_values.values) > 10:
                        shown += ", ..."
                    output.write(
                        f"    {meter_values.meter} [{meter_values.unit}]: {shown}\n"
                    )
            output.write("\n")

        if model.errors:
            output.write("ERRORS\n")
            output.write("-" * 40 + "\n")
            for error in model.errors:
                output.write(f"  {error.location} ({error.role}): {error.message}\n")
            output.write("\n")

        output.write("=" * 60 + "\n")
        return output.getvalue()
