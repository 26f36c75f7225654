"""
Benchmark execution and reporting package.
"""

from .base import (
    BenchmarkCase,
    BenchmarkError,
    CaseOutcome,
    CaseResult,
    CaseStatus,
    DuplicateNameError,
    ResourceUnavailableError,
    StopwatchError,
)
from .metrics import MetricRecord, MetricSink, Stopwatch, now
from .registry import BenchmarkRegistry
from .reporter import Alignment, Reporter
from .runner import BenchmarkRunner, CaseContext, RunResult

__all__ = [
    "Alignment",
    "BenchmarkCase",
    "BenchmarkError",
    "BenchmarkRegistry",
    "BenchmarkRunner",
    "CaseContext",
    "CaseOutcome",
    "CaseResult",
    "CaseStatus",
    "DuplicateNameError",
    "MetricRecord",
    "MetricSink",
    "Reporter",
    "ResourceUnavailableError",
    "RunResult",
    "Stopwatch",
    "StopwatchError",
    "now",
]
