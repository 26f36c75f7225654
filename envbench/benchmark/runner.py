"""
Benchmark runner: executes every registered case in order, times it,
classifies the outcome and hands the result to the reporter.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .base import BenchmarkCase, CaseOutcome, CaseResult, CaseStatus, OutcomeKind
from .metrics import MetricRecord, MetricSink, Stopwatch, peak_memory_mib
from .registry import BenchmarkRegistry

logger = logging.getLogger(__name__)


@dataclass
class CaseContext:
    """
    Everything a case body may use besides its iteration count.

    Attributes:
        multiplier: Difficulty multiplier of the run
        metrics: Sink for auxiliary measurements
        resources: ResourceSet with the optional external resources
    """
    multiplier: float = 1.0
    metrics: MetricSink = field(default_factory=MetricSink)
    resources: Any = None

    def __post_init__(self):
        if self.resources is None:
            from ..providers import ResourceSet
            self.resources = ResourceSet.unavailable()


@dataclass
class RunResult:
    """Result of a complete benchmark run."""
    results: List[CaseResult] = field(default_factory=list)
    metrics: List[MetricRecord] = field(default_factory=list)
    total_time: float = 0.0
    peak_memory_mib: Optional[float] = None
    started_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    environment: Dict[str, str] = field(default_factory=dict)
    configuration: Dict[str, Any] = field(default_factory=dict)

    def count(self, status: CaseStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def failed(self) -> List[CaseResult]:
        return [r for r in self.results if r.status is CaseStatus.FAILED]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "generated_at": self.started_at.isoformat(),
            "environment": self.environment,
            "configuration": self.configuration,
            "results": [r.to_dict() for r in self.results],
            "metrics": [m.to_dict() for m in self.metrics],
            "summary": {
                "succeeded": self.count(CaseStatus.SUCCEEDED),
                "skipped": self.count(CaseStatus.SKIPPED),
                "failed": self.count(CaseStatus.FAILED),
                "total_time_sec": self.total_time,
                "peak_memory_mib": self.peak_memory_mib,
            },
        }


class BenchmarkRunner:
    """
    Executes benchmark cases one at a time.

    Features:
        - Registry order is report order
        - A failing case is reported and never stops the run
        - Every lap, skipped ones included, adds to the stopwatch total
        - Auxiliary metrics are collected and reported after the cases

    Example:
        runner = BenchmarkRunner(registry, reporter=reporter, multiplier=2.0)
        result = runner.run()
    """

    def __init__(
        self,
        registry: BenchmarkRegistry,
        reporter: Optional[Any] = None,
        multiplier: float = 1.0,
        resources: Optional[Any] = None,
        stopwatch: Optional[Stopwatch] = None,
        metrics: Optional[MetricSink] = None,
    ):
        """
        Initialize benchmark runner.

        Args:
            registry: Cases to run
            reporter: Reporter receiving one line per case (optional)
            multiplier: Difficulty multiplier
            resources: ResourceSet handed to the cases
            stopwatch: Stopwatch accumulating the total time
            metrics: Sink for auxiliary measurements
        """
        self.registry = registry
        self.reporter = reporter
        self.multiplier = multiplier
        self.stopwatch = stopwatch or Stopwatch()
        self.metrics = metrics or MetricSink()
        self.context = CaseContext(
            multiplier=multiplier,
            metrics=self.metrics,
            resources=resources,
        )

    def run(self) -> RunResult:
        """
        Run every registered case, then report the collected metrics.

        Returns:
            RunResult with one CaseResult per registered case
        """
        result = RunResult()
        logger.info(f"Starting benchmark run: {len(self.registry)} cases, multiplier {self.multiplier}")

        for category, name, case in self.registry.iterate():
            case_result = self.run_case(category, name, case)
            result.results.append(case_result)

            if self.reporter is not None:
                self.reporter.print_result(case_result)

        result.metrics = self.metrics.drain()
        if self.reporter is not None:
            self.reporter.print_metrics(result.metrics)

        result.total_time = self.stopwatch.total_time
        result.peak_memory_mib = peak_memory_mib()

        logger.info(
            f"Benchmark run complete: {result.count(CaseStatus.SUCCEEDED)} succeeded, "
            f"{result.count(CaseStatus.SKIPPED)} skipped, "
            f"{result.count(CaseStatus.FAILED)} failed in {result.total_time:.4f}s"
        )
        return result

    def run_case(self, category: str, name: str, case: BenchmarkCase) -> CaseResult:
        """
        Run and classify a single case.

        Any exception raised by the case body is contained here and
        becomes a Failed result. The lap is stopped on every exit path.
        """
        outcome: Optional[CaseOutcome] = None
        error: Optional[Exception] = None

        self.metrics.begin(category, name)
        self.stopwatch.start()
        try:
            outcome = case(self.multiplier, self.context)
        except Exception as e:
            error = e
        finally:
            elapsed = self.stopwatch.stop()
            self.metrics.end()

        if error is not None:
            message = str(error) or type(error).__name__
            logger.warning(f"Benchmark {category}::{name} failed: {message}")
            logger.debug(f"Benchmark {category}::{name} traceback", exc_info=error)
            return CaseResult(category, name, CaseStatus.FAILED, elapsed, message, case.description)

        if outcome.kind is OutcomeKind.SKIP:
            logger.debug(f"Benchmark {category}::{name} skipped: {outcome.message or 'unsupported'}")
            return CaseResult(category, name, CaseStatus.SKIPPED, elapsed, outcome.message, case.description)

        if outcome.kind is OutcomeKind.FAULT:
            logger.warning(f"Benchmark {category}::{name} failed: {outcome.message}")
            return CaseResult(category, name, CaseStatus.FAILED, elapsed, outcome.message, case.description)

        logger.debug(f"Benchmark {category}::{name} finished in {elapsed:.4f}s")
        return CaseResult(category, name, CaseStatus.SUCCEEDED, elapsed, description=case.description)
