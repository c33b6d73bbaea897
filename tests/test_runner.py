"""Tests for the benchmark runner."""

import time

import pytest

from benchlet.annotations import (
    after_each_run,
    after_last_run,
    before_each_run,
    bench,
    bench_class,
)
from benchlet.exceptions import BenchmarkDefinitionError, MethodInvocationError
from benchlet.meter import CountingMeter
from benchlet.models import RunConfig
from benchlet.progress import LoggingProgressListener, ProgressListener
from benchlet.runner import BenchmarkRunner, run_benchmarks

CALLS: list[str] = []


class RecordingListener(ProgressListener):
    """Listener recording every notification."""

    def __init__(self):
        self.events = []

    def run_started(self, total_runs, element_totals):
        self.events.append(("run_started", total_runs, dict(element_totals)))

    def element_started(self, element_name):
        self.events.append(("element_started", element_name))

    def element_failed(self, element_name):
        self.events.append(("element_failed", element_name))

    def run_finished(self):
        self.events.append(("run_finished",))


class ExplodingListener(RecordingListener):
    def element_started(self, element_name):
        raise ConnectionError("observer went away")


class LifecycleBench:
    @bench(runs=3)
    def bench_work(self) -> None:
        CALLS.append("bench")

    @after_each_run
    def after_each(self) -> None:
        CALLS.append("after_each")

    @after_last_run
    def after_last(self) -> None:
        CALLS.append("after_last")


class BrokenSetupBench:
    @before_each_run
    def setup(self) -> None:
        raise RuntimeError("no fixture")

    @bench(runs=2)
    def bench_never(self) -> None:
        CALLS.append("bench")

    @after_each_run
    def cleanup(self) -> None:
        CALLS.append("cleanup")


@bench_class(runs=2)
class FirstClass:
    def work(self) -> None:
        CALLS.append("first")


@bench_class(runs=2)
class SecondClass:
    def work(self) -> None:
        CALLS.append("second")


@bench_class
class ThirdClass:
    def work(self) -> None:
        CALLS.append("third")


class NoBenchmarks:
    def helper(self) -> None:
        pass


class BadDefinition:
    @bench
    def bench_value(self) -> int:
        return 1


class NeedsArgs:
    def __init__(self, value):
        self.value = value

    @bench
    def bench_method(self) -> None:
        pass


@pytest.fixture(autouse=True)
def reset_calls():
    CALLS.clear()


def test_run_notifies_in_order():
    """Test listener notifications for a successful run."""
    listener = RecordingListener()
    runner = BenchmarkRunner(listeners=[listener])
    runner.add_class(LifecycleBench)

    result = runner.run()

    assert listener.events[0] == ("run_started", 3, {"LifecycleBench.bench_work": 3})
    assert listener.events[1:4] == [("element_started", "LifecycleBench.bench_work")] * 3
    assert listener.events[-1] == ("run_finished",)

    method_result = result.get_class_result(LifecycleBench).method_results[0]
    assert method_result.invocations == 3
    assert result.errors == []


def test_after_last_fires_with_first_after_call():
    """Test that the after-last hook fires once, after the first run."""
    runner = BenchmarkRunner()
    runner.add_class(LifecycleBench)
    runner.run()

    assert CALLS == [
        "bench",
        "after_each",
        "after_last",
        "bench",
        "after_each",
        "bench",
        "after_each",
    ]


def test_before_failure_skips_bench():
    """Test that a failing before hook skips the bench but runs the after hooks."""
    listener = RecordingListener()
    runner = BenchmarkRunner(listeners=[listener])
    runner.add_class(BrokenSetupBench)

    result = runner.run()

    assert CALLS == ["cleanup", "cleanup"]
    assert listener.events.count(("element_failed", "BrokenSetupBench.bench_never")) == 2
    assert len(result.errors) == 2
    assert all(isinstance(error, MethodInvocationError) for error in result.errors)
    assert len(result) == 0


def test_stop_on_error():
    """Test that stop_on_error ends the run at the first failure."""
    listener = RecordingListener()
    runner = BenchmarkRunner(config=RunConfig(stop_on_error=True), listeners=[listener])
    runner.add_classes([BrokenSetupBench, FirstClass])

    result = runner.run()

    started = [event for event in listener.events if event[0] == "element_started"]
    assert len(started) == 1
    assert "first" not in CALLS
    assert listener.events[-1] == ("run_finished",)
    assert len(result.errors) == 1


def test_parallel_run():
    """Test that classes run in parallel produce one result per class."""
    counter = CountingMeter()
    runner = BenchmarkRunner(
        meters=[counter], config=RunConfig(parallel=True, max_workers=3)
    )
    runner.add_classes([FirstClass, SecondClass, ThirdClass])

    result = runner.run()

    assert len(result) == 3
    assert sorted(CALLS) == ["first", "first", "second", "second", "third"]
    assert result.get_class_result(FirstClass).values(counter) == [1.0, 1.0]
    assert result.get_class_result(ThirdClass).values(counter) == [1.0]


@bench_class(runs=20)
class SlowFirstClass:
    def work(self) -> None:
        time.sleep(0.002)


@bench_class(runs=20)
class SlowSecondClass:
    def work(self) -> None:
        time.sleep(0.002)


def test_parallel_counts_one_per_invocation():
    """Test that overlapping classes still count exactly one per invocation."""
    counter = CountingMeter()
    runner = BenchmarkRunner(meters=[counter], config=RunConfig(parallel=True))
    runner.add_classes([SlowFirstClass, SlowSecondClass])

    result = runner.run()

    values = result.values(counter)
    assert len(values) == 40
    assert all(value == 1.0 for value in values)


def test_default_runs_from_config():
    """Test that undecorated run counts fall back to the configuration."""
    runner = BenchmarkRunner(config=RunConfig(default_runs=4))
    runner.add_class(ThirdClass)

    runner.run()

    assert CALLS == ["third"] * 4


def test_listener_failure_does_not_stop_run(log_output):
    """Test that a raising listener is logged and ignored."""
    runner = BenchmarkRunner(listeners=[ExplodingListener()])
    runner.add_class(ThirdClass)

    result = runner.run()

    assert CALLS == ["third"]
    assert len(result) == 1
    assert "observer went away" in log_output.getvalue()


def test_class_without_benchmarks(log_output):
    """Test that classes without benchmarks are skipped with a warning."""
    runner = BenchmarkRunner()
    runner.add_class(NoBenchmarks)

    assert runner.plan() == {}
    assert "NoBenchmarks has no benchmark methods" in log_output.getvalue()


def test_definition_error_raised_before_run():
    """Test that declaration errors surface before anything runs."""
    listener = RecordingListener()
    runner = BenchmarkRunner(listeners=[listener])
    runner.add_classes([ThirdClass, BadDefinition])

    with pytest.raises(BenchmarkDefinitionError):
        runner.run()

    assert listener.events == []
    assert CALLS == []


def test_uninstantiable_class_fails_elements():
    """Test that a class that cannot be built fails all its elements."""
    listener = RecordingListener()
    runner = BenchmarkRunner(listeners=[listener])
    runner.add_class(NeedsArgs)

    result = runner.run()

    assert ("element_failed", "NeedsArgs.bench_method") in listener.events
    assert len(result) == 0


def test_runner_queue():
    """Test adding, deduplicating and clearing classes."""
    runner = BenchmarkRunner()
    runner.add_classes([FirstClass, FirstClass, SecondClass])
    assert runner.class_count == 2

    runner.clear()
    assert runner.class_count == 0


def test_logging_listener(log_output):
    """Test that the logging listener reports through the logger."""
    runner = BenchmarkRunner(listeners=[LoggingProgressListener()])
    runner.add_class(BrokenSetupBench)
    runner.run()

    text = log_output.getvalue()
    assert "Starting 2 runs of 1 benchmark methods" in text
    assert "[1/2] BrokenSetupBench.bench_never" in text
    assert "Finished: 2 runs, 2 failed" in text


def test_run_benchmarks_reads_env(monkeypatch):
    """Test the convenience function with configuration from the environment."""
    monkeypatch.setenv("BENCHLET_RUNS", "2")

    result = run_benchmarks(ThirdClass)

    assert CALLS == ["third", "third"]
    assert len(result) == 1
