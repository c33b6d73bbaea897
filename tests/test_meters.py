"""Tests for meters."""

import threading
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from benchlet.meter import (
    CountingMeter,
    MemoryMeter,
    MemoryUnit,
    MeterSample,
    TimeMeter,
    TimeUnit,
)


def test_meter_equality_ignores_values():
    """Test that meters compare by name and unit only."""
    used = CountingMeter()
    for _ in range(5):
        used.sample()

    assert used == CountingMeter()
    assert hash(used) == hash(CountingMeter())
    assert CountingMeter() != CountingMeter("Other")
    assert TimeMeter(TimeUnit.MILLISECONDS) == TimeMeter(TimeUnit.MILLISECONDS)
    assert TimeMeter(TimeUnit.MILLISECONDS) != TimeMeter(TimeUnit.SECONDS)
    assert len({TimeMeter(), TimeMeter(), CountingMeter()}) == 2


def test_counting_meter():
    """Test that the counter increases by one per reading."""
    meter = CountingMeter()
    assert meter.value == 0

    first = meter.sample()
    second = meter.sample()

    assert second.value - first.value == 1
    assert meter.value == 2
    assert meter.tick() == 3


def test_time_meter_units():
    """Test unit symbols and descriptions of the time meter."""
    meter = TimeMeter(TimeUnit.MICROSECONDS)
    assert meter.name == "TimeMeter"
    assert meter.unit == "us"
    assert meter.unit_description == "microseconds"
    assert TimeUnit.SECONDS.nanoseconds == 1_000_000_000
    assert TimeUnit.HOURS.symbol == "h"


def test_time_meter_conversion():
    """Test that readings are converted from nanoseconds."""
    with patch("benchlet.meter.timer.time.perf_counter_ns", return_value=3_000_000_000):
        assert TimeMeter(TimeUnit.SECONDS).read() == 3.0
        assert TimeMeter(TimeUnit.MILLISECONDS).read() == 3000.0


def test_time_meter_is_monotonic():
    """Test that consecutive readings never go backwards."""
    meter = TimeMeter(TimeUnit.NANOSECONDS)
    first = meter.sample()
    second = meter.sample()
    assert second.value >= first.value
    assert first.name == "TimeMeter"
    assert first.unit == "ns"


def test_memory_meter():
    """Test that the memory meter reads the process RSS in its unit."""
    process = MagicMock()
    process.memory_info.return_value.rss = 4 * 1024 * 1024
    with patch("benchlet.meter.memory.psutil.Process", return_value=process):
        meter = MemoryMeter(MemoryUnit.MEBIBYTES)

    assert meter.read() == 4.0
    assert meter.unit == "MiB"


def test_memory_meter_real_process():
    """Test reading the real process memory."""
    assert MemoryMeter(MemoryUnit.BYTES).read() > 0


def test_meter_sample_is_frozen():
    """Test that samples cannot be modified."""
    sample = MeterSample(name="TimeMeter", unit="ms", value=1.0)
    with pytest.raises(ValidationError):
        sample.value = 2.0


def test_counting_meter_per_thread():
    """Test that readings in other threads do not advance this thread's counter."""
    meter = CountingMeter()
    before = meter.sample()

    def read_elsewhere():
        for _ in range(10):
            meter.sample()

    thread = threading.Thread(target=read_elsewhere)
    thread.start()
    thread.join()

    assert meter.sample().value - before.value == 1
