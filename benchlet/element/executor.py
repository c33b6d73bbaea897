"""Per-class execution of lifecycle hooks and benchmark methods.

An ``ExecutionContext`` owns the meters, the run result and one
``BenchmarkExecutor`` per benchmarked class. Building a new context is how a
new run starts; nothing is kept in module-level state.

Usage:
    from benchlet.element.executor import ExecutionContext

    context = ExecutionContext([TimeMeter(), CountingMeter()], RunResult())
    executor = context.get_executor(element)

    instance = element.declaring_class()
    executor.execute_before_methods(instance)
    executor.execute_bench(instance)
    executor.execute_after_methods(instance)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from benchlet.annotations import Role
from benchlet.element.benchmark_element import BenchmarkElement
from benchlet.element.benchmark_method import BenchmarkMethod
from benchlet.element.validator import check_method, invoke_method
from benchlet.exceptions import BenchmarkError, MeterError
from benchlet.meter.base import Meter
from benchlet.result.results import RunResult
from benchlet.utils.logger import Logger


class HookState(Enum):
    """State of a run-once hook."""

    PENDING = "pending"
    DONE = "done"


class ExecutionContext:
    """Meters, run result and executor cache of one run.

    Creating a context is the reset point of a run: it must not be built
    while executors of a previous context are still running.
    """

    def __init__(self, meters: Iterable[Meter], run_result: RunResult) -> None:
        Logger.ensure_configured()
        # dict.fromkeys keeps order and drops equal meters
        self._meters: tuple[Meter, ...] = tuple(dict.fromkeys(meters))
        self._run_result = run_result
        self._run_result.register_meters(self._meters)
        self._executors: dict[type, BenchmarkExecutor] = {}
        self._lock = threading.Lock()

    @property
    def meters(self) -> tuple[Meter, ...]:
        return self._meters

    @property
    def run_result(self) -> RunResult:
        return self._run_result

    def get_executor(self, element: BenchmarkElement) -> BenchmarkExecutor:
        """Return the executor of the element's declaring class, creating it once."""
        declaring_class = element.declaring_class
        with self._lock:
            executor = self._executors.get(declaring_class)
            if executor is None:
                executor = BenchmarkExecutor(element.method, self)
                self._executors[declaring_class] = executor
            return executor

    def __len__(self) -> int:
        """Return number of executors created so far."""
        return len(self._executors)


class BenchmarkExecutor:
    """Runs hooks and benchmark methods of one class.

    The executor is bound to its class, not to a method: the run-once hooks
    are guarded per class, so they fire once no matter how many benchmark
    methods of that class are executed.

    ``execute_before_methods``, ``execute_bench`` and
    ``execute_after_methods`` must be sequenced by the caller; only the
    run-once claims are thread safe.
    """

    def __init__(self, method: BenchmarkMethod, context: ExecutionContext) -> None:
        self._declaring_class = method.declaring_class
        self._method = method
        self._context = context
        self._before_first = HookState.PENDING
        self._after_last = HookState.PENDING
        self._latch_lock = threading.Lock()
        self._log = Logger.get(f"executor.{self._declaring_class.__name__}")

    @property
    def declaring_class(self) -> type:
        return self._declaring_class

    @property
    def before_first_done(self) -> bool:
        return self._before_first is HookState.DONE

    @property
    def after_last_done(self) -> bool:
        return self._after_last is HookState.DONE

    # -------------------------------------------------------------------------
    # Run-once latches
    # -------------------------------------------------------------------------

    def _claim_before_first(self) -> bool:
        with self._latch_lock:
            if self._before_first is HookState.DONE:
                return False
            self._before_first = HookState.DONE
            return True

    def _claim_after_last(self) -> bool:
        with self._latch_lock:
            if self._after_last is HookState.DONE:
                return False
            self._after_last = HookState.DONE
            return True

    # -------------------------------------------------------------------------
    # Lifecycle phases
    # -------------------------------------------------------------------------

    def execute_before_methods(
        self, instance: Any, method: BenchmarkMethod | None = None
    ) -> None:
        """Run the before-first hook once, then the before-each hooks.

        Args:
            instance: Instance of the executor's class.
            method: Benchmark method whose hooks to run; defaults to the
                method the executor was created for.

        Raises:
            MethodCheckError: If a hook is not a valid method of ``instance``.
            MethodInvocationError: If a hook raised.
        """
        method = method or self._method
        roles = [Role.BEFORE_EACH_RUN]
        if method.hooks(Role.BEFORE_FIRST_RUN) and self._claim_before_first():
            roles.insert(0, Role.BEFORE_FIRST_RUN)
        self._run_hooks(instance, method, roles)

    def execute_after_methods(
        self, instance: Any, method: BenchmarkMethod | None = None
    ) -> None:
        """Run the after-each hooks, and the after-last hook on the first call.

        Raises:
            MethodCheckError: If a hook is not a valid method of ``instance``.
            MethodInvocationError: If a hook raised.
        """
        method = method or self._method
        roles = [Role.AFTER_EACH_RUN]
        if method.hooks(Role.AFTER_LAST_RUN) and self._claim_after_last():
            roles.append(Role.AFTER_LAST_RUN)
        self._run_hooks(instance, method, roles)

    def _run_hooks(self, instance: Any, method: BenchmarkMethod, roles: list[Role]) -> None:
        # Every due hook runs even if an earlier one failed
        errors: list[BenchmarkError] = []
        for role in roles:
            for hook in method.hooks(role):
                error = self._check_and_invoke(instance, hook, role)
                if error is not None:
                    errors.append(error)
        if errors:
            raise errors[0]

    def _check_and_invoke(
        self, instance: Any, func: Callable[..., Any], role: Role
    ) -> BenchmarkError | None:
        error: BenchmarkError | None = check_method(instance, func, role)
        if error is None:
            self._log.debug(f"{role.value}: {func.__name__}")
            error = invoke_method(instance, func, role)
        if error is not None:
            self._record(error)
        return error

    def _record(self, error: BenchmarkError) -> None:
        self._log.warning(str(error))
        self._context.run_result.add_error(error)

    def execute_bench(self, instance: Any, method: BenchmarkMethod | None = None) -> None:
        """Invoke a benchmark method once, measured by every meter.

        Args:
            instance: Instance of the executor's class.
            method: Benchmark method to run; defaults to the method the
                executor was created for.

        Raises:
            MethodCheckError: If the method is not a valid method of ``instance``.
            MethodInvocationError: If the method raised. The attempt is still
                counted as a failure on its method result.
        """
        func = (method or self._method).method
        check_error = check_method(instance, func, Role.BENCH)
        if check_error is not None:
            self._record(check_error)
            raise check_error

        # Windows nest: the first meter is read last before and first after,
        # so other meters' reads never fall inside its window
        meters = self._context.meters
        before = self._sample(tuple(reversed(meters)), func)
        error = invoke_method(instance, func, Role.BENCH)
        after = self._sample(meters, func)

        result = self._context.run_result.find_or_create_method_result(
            self._declaring_class, func
        )
        if error is not None:
            result.record_failure()
            self._record(error)
            raise error

        result.record_invocation(
            {
                meter: after[meter] - before[meter]
                for meter in meters
                if meter in before and meter in after
            }
        )

    def _sample(
        self, meters: tuple[Meter, ...], func: Callable[..., Any]
    ) -> dict[Meter, float]:
        # A failing meter loses its value for this invocation, nothing more
        values: dict[Meter, float] = {}
        for meter in meters:
            try:
                values[meter] = meter.sample().value
            except Exception as e:
                self._record(
                    MeterError(self._declaring_class, func, Role.BENCH, meter.name, e)
                )
        return values
