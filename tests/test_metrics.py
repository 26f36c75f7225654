"""Tests for the clock, the stopwatch and the metric sink."""

from __future__ import annotations

import pytest

from conftest import FakeClock
from envbench.benchmark.base import StopwatchError
from envbench.benchmark.metrics import (
    MetricSink,
    Stopwatch,
    now,
    peak_memory_mib,
    throughput,
)


class TestClock:
    """The module clock is a non-decreasing fractional-second source."""

    def test_now_is_non_decreasing(self) -> None:
        samples = [now() for _ in range(1000)]
        assert samples == sorted(samples)

    def test_now_returns_float_seconds(self) -> None:
        assert isinstance(now(), float)


class TestStopwatch:
    """Laps accumulate into the total; stop needs a start."""

    def test_total_is_sum_of_laps(self) -> None:
        clock = FakeClock([1.0, 1.5, 2.0, 2.25, 10.0, 11.0])
        stopwatch = Stopwatch(clock=clock)

        laps = []
        for _ in range(3):
            stopwatch.start()
            laps.append(stopwatch.stop())

        assert laps == [0.5, 0.25, 1.0]
        assert stopwatch.total_time == pytest.approx(sum(laps))
        assert stopwatch.laps == 3

    def test_start_returns_timestamp(self) -> None:
        stopwatch = Stopwatch(clock=FakeClock([42.0]))
        assert stopwatch.start() == 42.0
        assert stopwatch.running

    def test_stop_without_start_raises(self) -> None:
        stopwatch = Stopwatch(clock=FakeClock([0.0]))
        with pytest.raises(StopwatchError):
            stopwatch.stop()

    def test_second_stop_raises(self) -> None:
        stopwatch = Stopwatch(clock=FakeClock([0.0, 1.0]))
        stopwatch.start()
        stopwatch.stop()
        with pytest.raises(StopwatchError):
            stopwatch.stop()

    def test_restart_does_not_double_count(self) -> None:
        """A second start replaces the open lap instead of adding to it."""
        stopwatch = Stopwatch(clock=FakeClock([0.0, 5.0, 6.0]))
        stopwatch.start()
        stopwatch.start()
        lap = stopwatch.stop()

        assert lap == 1.0
        assert stopwatch.total_time == 1.0
        assert not stopwatch.running

    def test_real_clock_laps_are_non_negative(self) -> None:
        stopwatch = Stopwatch()
        stopwatch.start()
        assert stopwatch.stop() >= 0.0


class TestMetricSink:
    """Metrics are attributed to the running case, in emission order."""

    def test_record_uses_current_case(self) -> None:
        sink = MetricSink()
        sink.begin("mysql", "select_all")
        entry = sink.record("q/s", 1234)

        assert entry.key == "mysql::select_all"
        assert entry.value == "1234 q/s"

    def test_drain_keeps_order_and_does_not_clear(self) -> None:
        sink = MetricSink()
        sink.begin("mysql", "update")
        sink.record("q/s", 1)
        sink.begin("mysql", "transaction_insert")
        sink.record("t/s", 2)
        sink.end()

        first = sink.drain()
        assert [(r.key, r.value) for r in first] == [
            ("mysql::update", "1 q/s"),
            ("mysql::transaction_insert", "2 t/s"),
        ]
        assert sink.drain() == first
        assert len(sink) == 2

    def test_same_name_in_two_categories_stays_distinct(self) -> None:
        sink = MetricSink()
        sink.begin("a", "insert")
        sink.record("q/s", 1)
        sink.begin("b", "insert")
        sink.record("q/s", 2)

        assert [r.key for r in sink.drain()] == ["a::insert", "b::insert"]

    def test_record_outside_a_case_raises(self) -> None:
        sink = MetricSink()
        with pytest.raises(RuntimeError):
            sink.record("q/s", 1)

        sink.begin("core", "x")
        sink.end()
        with pytest.raises(RuntimeError):
            sink.record("q/s", 1)


class TestHelpers:
    def test_throughput_rounds(self) -> None:
        assert throughput(1000, started_at=1.0, finished_at=3.0) == 500
        assert throughput(10, started_at=0.0, finished_at=3.0) == 3

    def test_throughput_zero_elapsed(self) -> None:
        assert throughput(1000, started_at=2.0, finished_at=2.0) == 0

    def test_peak_memory_is_positive_or_unavailable(self) -> None:
        peak = peak_memory_mib()
        assert peak is None or peak > 0
