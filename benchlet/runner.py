"""Runner sequencing benchmark classes through their executors.

Usage:
    from benchlet.runner import BenchmarkRunner

    runner = BenchmarkRunner(config=RunConfig(default_runs=10))
    runner.add_classes([SortBench, HashBench])
    runner.add_listener(LoggingProgressListener())

    result = runner.run()
    result.emit(sys.stdout, OutputFormat.TEXT)
"""

import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from benchlet.element.benchmark_element import BenchmarkElement
from benchlet.element.benchmark_method import BenchmarkMethod
from benchlet.element.executor import ExecutionContext
from benchlet.exceptions import BenchmarkError
from benchlet.meter.base import Meter
from benchlet.meter.counting import CountingMeter
from benchlet.meter.timer import TimeMeter
from benchlet.models.config_models import RunConfig
from benchlet.progress import ProgressListener
from benchlet.result.results import RunResult
from benchlet.utils.logger import Logger


class BenchmarkRunner:
    """Runs benchmark classes and collects their results.

    Each run of a benchmark method executes the before hooks, the method
    itself and the after hooks. When a before hook fails the method is
    skipped for that run; the after hooks still run. One instance of each
    class is shared by all of its runs.

    Example:
        >>> runner = BenchmarkRunner()
        >>> runner.add_class(SortBench)
        >>> result = runner.run()
        >>> len(result)
        1
    """

    def __init__(
        self,
        meters: Iterable[Meter] | None = None,
        config: RunConfig | None = None,
        listeners: Iterable[ProgressListener] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            meters: Meters to measure with. Defaults to a TimeMeter in the
                configured unit plus a CountingMeter.
            config: Run configuration; defaults to ``RunConfig()``.
            listeners: Progress listeners notified during ``run()``.
        """
        self._config = config or RunConfig()
        Logger.ensure_configured(self._config.log_level)
        if meters is None:
            meters = [TimeMeter(self._config.time_unit), CountingMeter()]
        self._meters: list[Meter] = list(meters)
        self._classes: list[type] = []
        self._listeners: list[ProgressListener] = list(listeners or [])
        self._stop = threading.Event()
        self._log = Logger.get("runner")

    def add_class(self, benchmark_class: type) -> None:
        """Queue a benchmark class."""
        if benchmark_class not in self._classes:
            self._classes.append(benchmark_class)

    def add_classes(self, benchmark_classes: Iterable[type]) -> None:
        """Queue several benchmark classes."""
        for benchmark_class in benchmark_classes:
            self.add_class(benchmark_class)

    def add_listener(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def clear(self) -> None:
        """Clear all queued classes."""
        self._classes.clear()

    @property
    def class_count(self) -> int:
        """Return number of queued classes."""
        return len(self._classes)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def plan(self) -> dict[type, list[BenchmarkElement]]:
        """Build the elements to run, per class, in execution order.

        Raises:
            BenchmarkDefinitionError: If a queued class is declared incorrectly.
        """
        planned: dict[type, list[BenchmarkElement]] = {}
        for benchmark_class in self._classes:
            methods = BenchmarkMethod.discover(benchmark_class)
            if not methods:
                self._log.warning(f"{benchmark_class.__name__} has no benchmark methods")
                continue
            planned[benchmark_class] = [
                BenchmarkElement(method, run)
                for method in methods
                for run in range(method.get_runs(self._config.default_runs))
            ]
        return planned

    def run(self) -> RunResult:
        """Run every queued class and return the collected results.

        Raises:
            BenchmarkDefinitionError: If a queued class is declared incorrectly.
                Raised before anything runs.
        """
        planned = self.plan()
        run_result = RunResult()
        context = ExecutionContext(self._meters, run_result)
        self._stop.clear()

        element_totals: dict[str, int] = {}
        for elements in planned.values():
            for element in elements:
                name = element.method.name
                element_totals[name] = element_totals.get(name, 0) + 1
        self._notify("run_started", sum(element_totals.values()), element_totals)

        if self._config.parallel and len(planned) > 1:
            workers = self._config.max_workers or len(planned)
            self._log.debug(f"Running {len(planned)} classes on {workers} threads")
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(self._run_class, context, benchmark_class, elements)
                    for benchmark_class, elements in planned.items()
                ]
                for future in futures:
                    future.result()
        else:
            for benchmark_class, elements in planned.items():
                self._run_class(context, benchmark_class, elements)

        run_result.finalize()
        self._notify("run_finished")
        return run_result

    def _run_class(
        self,
        context: ExecutionContext,
        benchmark_class: type,
        elements: list[BenchmarkElement],
    ) -> None:
        if self._stop.is_set():
            return

        try:
            instance = benchmark_class()
        except Exception as e:
            self._log.error(f"Cannot instantiate {benchmark_class.__name__}: {e}")
            for element in elements:
                self._notify("element_failed", element.method.name)
            if self._config.stop_on_error:
                self._stop.set()
            return

        for element in elements:
            if self._stop.is_set():
                return
            if not self._run_element(context, instance, element):
                self._notify("element_failed", element.method.name)
                if self._config.stop_on_error:
                    self._log.info("Stopping run after first failure")
                    self._stop.set()
                    return

    def _run_element(
        self, context: ExecutionContext, instance: Any, element: BenchmarkElement
    ) -> bool:
        # Errors are already logged and recorded on the run result by the executor
        executor = context.get_executor(element)
        method = element.method
        self._notify("element_started", method.name)

        succeeded = True
        try:
            executor.execute_before_methods(instance, method)
        except BenchmarkError:
            succeeded = False

        if succeeded:
            try:
                executor.execute_bench(instance, method)
            except BenchmarkError:
                succeeded = False

        try:
            executor.execute_after_methods(instance, method)
        except BenchmarkError:
            succeeded = False

        return succeeded

    def _notify(self, event: str, *args: Any) -> None:
        for listener in self._listeners:
            try:
                getattr(listener, event)(*args)
            except Exception as e:
                self._log.warning(
                    f"Progress listener {type(listener).__name__}.{event} failed: {e}"
                )


def run_benchmarks(
    *benchmark_classes: type,
    meters: Iterable[Meter] | None = None,
    config: RunConfig | None = None,
) -> RunResult:
    """Run the given benchmark classes with a fresh runner.

    Args:
        benchmark_classes: Classes to run.
        meters: Meters to use (see BenchmarkRunner).
        config: Run configuration; read from the environment when omitted.

    Returns:
        RunResult with all results.
    """
    runner = BenchmarkRunner(meters=meters, config=config or RunConfig.from_env())
    runner.add_classes(benchmark_classes)
    return runner.run()
