"""Benchlet - micro-benchmark execution engine."""

__version__ = "0.1.0"

from benchlet.annotations import (  # noqa: E402
    Role,
    after_each_run,
    after_last_run,
    before_each_run,
    before_first_run,
    bench,
    bench_class,
    skip_bench,
)
from benchlet.element import (  # noqa: E402
    BenchmarkElement,
    BenchmarkExecutor,
    BenchmarkMethod,
    ExecutionContext,
)
from benchlet.exceptions import (  # noqa: E402
    BenchletError,
    BenchmarkDefinitionError,
    BenchmarkError,
    MeterError,
    MethodCheckError,
    MethodInvocationError,
)
from benchlet.meter import (  # noqa: E402
    CountingMeter,
    MemoryMeter,
    MemoryUnit,
    Meter,
    TimeMeter,
    TimeUnit,
)
from benchlet.models import RunConfig  # noqa: E402
from benchlet.progress import LoggingProgressListener, ProgressListener  # noqa: E402
from benchlet.result import (  # noqa: E402
    ClassResult,
    MethodResult,
    OutputFormat,
    RunResult,
)
from benchlet.runner import BenchmarkRunner, run_benchmarks  # noqa: E402

__all__ = [
    "BenchletError",
    "BenchmarkDefinitionError",
    "BenchmarkElement",
    "BenchmarkError",
    "BenchmarkExecutor",
    "BenchmarkMethod",
    "BenchmarkRunner",
    "ClassResult",
    "CountingMeter",
    "ExecutionContext",
    "LoggingProgressListener",
    "MemoryMeter",
    "MemoryUnit",
    "Meter",
    "MeterError",
    "MethodCheckError",
    "MethodInvocationError",
    "MethodResult",
    "OutputFormat",
    "ProgressListener",
    "Role",
    "RunConfig",
    "RunResult",
    "TimeMeter",
    "TimeUnit",
    "__version__",
    "after_each_run",
    "after_last_run",
    "before_each_run",
    "before_first_run",
    "bench",
    "bench_class",
    "run_benchmarks",
    "skip_bench",
]
