"""Benchmark elements and their execution.

This module provides:
- BenchmarkMethod: Benchmark method with its lifecycle hooks resolved
- BenchmarkElement: One scheduled run of a benchmark method
- ExecutionContext: Meters, run result and executor cache of one run
- BenchmarkExecutor: Per-class execution of hooks and benchmarks
- check_method / invoke_method: Structural checks and invocation
"""

from benchlet.element.benchmark_element import BenchmarkElement
from benchlet.element.benchmark_method import BenchmarkMethod
from benchlet.element.executor import BenchmarkExecutor, ExecutionContext, HookState
from benchlet.element.validator import (
    check_declared_method,
    check_method,
    invoke_method,
)

__all__ = [
    "BenchmarkElement",
    "BenchmarkExecutor",
    "BenchmarkMethod",
    "ExecutionContext",
    "HookState",
    "check_declared_method",
    "check_method",
    "invoke_method",
]
