#!/usr/bin/env python3
"""Demo script benchmarking a few ways of sorting a list."""

import random
import sys

from benchlet import (
    BenchmarkRunner,
    CountingMeter,
    LoggingProgressListener,
    MemoryMeter,
    OutputFormat,
    RunConfig,
    TimeMeter,
    before_each_run,
    before_first_run,
    bench,
)
from benchlet.utils import Logger


class SortingBench:
    """Compares built-in sorting against a hand-written insertion sort."""

    @before_first_run
    def build_input(self) -> None:
        self.source = [random.random() for _ in range(2_000)]

    @before_each_run
    def copy_input(self) -> None:
        self.data = list(self.source)

    @bench(runs=10)
    def bench_sorted(self) -> None:
        sorted(self.data)

    @bench(runs=10)
    def bench_list_sort(self) -> None:
        self.data.sort()

    @bench(runs=3)
    def bench_insertion_sort(self) -> None:
        data = self.data
        for i in range(1, len(data)):
            key = data[i]
            j = i - 1
            while j >= 0 and data[j] > key:
                data[j + 1] = data[j]
                j -= 1
            data[j + 1] = key


def main():
    """Run the sorting benchmarks and print the results."""
    Logger.configure(level="INFO", output="stderr", timestamps=False)

    print("=" * 60)
    print("Sorting Benchmark Demo")
    print("=" * 60)
    print()

    runner = BenchmarkRunner(
        meters=[TimeMeter(), CountingMeter(), MemoryMeter()],
        config=RunConfig(default_runs=5),
        listeners=[LoggingProgressListener()],
    )
    runner.add_class(SortingBench)
    result = runner.run()

    result.emit(sys.stdout, OutputFormat.TEXT)

    # Mean time per method from the result tree
    time_meter = result.registered_meters[0]
    print("Mean time per method:")
    for class_result in result.class_results:
        for method_result in class_result.method_results:
            values = method_result.values(time_meter)
            if values:
                mean = sum(values) / len(values)
                print(f"  {method_result.name}: {mean:.3f} {time_meter.unit}")
    print()

    # Show JSON output
    print("=" * 60)
    print("JSON Output (for integration with other tools):")
    print("=" * 60)
    result.emit(sys.stdout, OutputFormat.JSON)
    print()


if __name__ == "__main__":
    main()
