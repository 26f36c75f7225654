"""
Timing and auxiliary metrics for benchmark runs.
"""

import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Any

from .base import StopwatchError

try:
    import resource
except ImportError:  # Windows
    resource = None


def _select_clock() -> Callable[[], float]:
    """
    Pick the best available time source.

    ``time.perf_counter`` is monotonic and high resolution on every
    mainstream platform. If the platform reports it as non-monotonic we
    fall back to ``time.time``, which follows the wall clock and can jump
    backwards or forwards when the system clock is adjusted.
    """
    info = time.get_clock_info("perf_counter")
    if info.monotonic:
        return time.perf_counter
    return time.time


_clock = _select_clock()


def now() -> float:
    """Current timestamp in fractional seconds."""
    return _clock()


class Stopwatch:
    """
    Accumulates elapsed time over several start/stop laps.

    Usage:
        stopwatch = Stopwatch()
        stopwatch.start()
        do_work()
        lap = stopwatch.stop()
        print(stopwatch.total_time)
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Initialize stopwatch.

        Args:
            clock: Time source returning seconds (default: module clock)
        """
        self._clock = clock or now
        self.total_time: float = 0.0
        self.laps: int = 0
        self._lap_start: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._lap_start is not None

    def start(self) -> float:
        """Start a lap. Restarting a running lap discards the open one."""
        self._lap_start = self._clock()
        return self._lap_start

    def stop(self) -> float:
        """
        Close the current lap and add it to the total.

        Returns:
            Lap duration in seconds

        Raises:
            StopwatchError: If no lap was started
        """
        if self._lap_start is None:
            raise StopwatchError("Stopwatch.stop() called without a matching start()")

        lap = self._clock() - self._lap_start
        self._lap_start = None
        self.total_time += lap
        self.laps += 1
        return lap


@dataclass(frozen=True)
class MetricRecord:
    """One auxiliary measurement attributed to a case."""
    category: str
    name: str
    value: str

    @property
    def key(self) -> str:
        return f"{self.category}::{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {"case": self.key, "value": self.value}


class MetricSink:
    """
    Side channel for case-emitted measurements such as queries/second.

    The runner marks which case is running; ``record`` attaches the
    metric to that case. Entries are kept in emission order.
    """

    def __init__(self):
        self._records: List[MetricRecord] = []
        self._current: Optional[Tuple[str, str]] = None

    @property
    def current(self) -> Optional[Tuple[str, str]]:
        return self._current

    def begin(self, category: str, name: str) -> None:
        self._current = (category, name)

    def end(self) -> None:
        self._current = None

    def record(self, unit: str, value: Any) -> MetricRecord:
        """
        Attach ``"<value> <unit>"`` to the running case.

        Raises:
            RuntimeError: If no case is running
        """
        if self._current is None:
            raise RuntimeError("MetricSink.record() called while no benchmark case is running")

        category, name = self._current
        entry = MetricRecord(category, name, f"{value} {unit}")
        self._records.append(entry)
        return entry

    def drain(self) -> List[MetricRecord]:
        """All entries in emission order. The sink is not cleared."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)


def throughput(count: int, started_at: float, finished_at: Optional[float] = None) -> int:
    """Operations per second since ``started_at``, rounded to an integer."""
    elapsed = (now() if finished_at is None else finished_at) - started_at
    if elapsed <= 0:
        return 0
    return round(count / elapsed)


def peak_memory_mib() -> Optional[float]:
    """
    Peak resident set size of this process in MiB.

    Returns None when the platform cannot report it.
    """
    if resource is None:
        return None

    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    if sys.platform == "darwin":
        return peak / 1024 / 1024
    return peak / 1024
