"""
Core types shared by the benchmark engine.
Cases return a CaseOutcome; the runner turns it into a CaseResult.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class BenchmarkError(Exception):
    """Base exception for benchmark engine errors."""
    pass


class DuplicateNameError(BenchmarkError):
    """Raised when a (category, name) pair is registered twice."""
    pass


class ResourceUnavailableError(BenchmarkError):
    """Raised when an external resource cannot be acquired."""
    pass


class StopwatchError(BenchmarkError):
    """Raised when the stopwatch is stopped without being started."""
    pass


class OutcomeKind(Enum):
    """What a case body reported back."""
    SUCCESS = "success"
    SKIP = "skip"
    FAULT = "fault"


class CaseStatus(Enum):
    """Terminal classification of a case execution."""
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class CaseOutcome:
    """
    Tagged result returned by every benchmark case.

    Use the constructors instead of building instances directly:
        CaseOutcome.success(count)
        CaseOutcome.skip("database unavailable")
        CaseOutcome.fault("unexpected row count")
    """
    kind: OutcomeKind
    value: Any = None
    message: str = ""

    @classmethod
    def success(cls, value: Any = None) -> "CaseOutcome":
        return cls(OutcomeKind.SUCCESS, value=value)

    @classmethod
    def skip(cls, reason: str = "") -> "CaseOutcome":
        return cls(OutcomeKind.SKIP, message=reason)

    @classmethod
    def fault(cls, message: str) -> "CaseOutcome":
        return cls(OutcomeKind.FAULT, message=message)

    @property
    def is_skip(self) -> bool:
        return self.kind is OutcomeKind.SKIP


@dataclass
class CaseResult:
    """
    Classified result of one case execution.

    Exactly one of Succeeded (with elapsed time), Skipped or
    Failed (with message). The elapsed time is kept for every status
    but only rendered for Succeeded.
    """
    category: str
    name: str
    status: CaseStatus
    elapsed: float = 0.0
    message: str = ""
    description: str = ""

    @property
    def key(self) -> str:
        """Report label, e.g. ``core::math``."""
        return f"{self.category}::{self.name}"

    @property
    def value(self) -> str:
        """Rendered report value."""
        if self.status is CaseStatus.SKIPPED:
            return "SKIPPED"
        if self.status is CaseStatus.FAILED:
            return f"ERROR: {self.message}"
        return format_seconds(self.elapsed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "category": self.category,
            "name": self.name,
            "description": self.description or None,
            "status": self.status.value,
            "elapsed_sec": self.elapsed if self.status is CaseStatus.SUCCEEDED else None,
            "message": self.message or None,
            "value": self.value,
        }


def format_seconds(seconds: float) -> str:
    """Format a duration the way every report line shows it."""
    return f"{seconds:.4f} s"


@dataclass(frozen=True)
class BenchmarkCase:
    """
    A named unit of benchmark work.

    ``func`` receives the scaled iteration count and the CaseContext
    and must return a CaseOutcome.

    Attributes:
        category: Category the case belongs to (e.g. "core")
        name: Case name, unique within its category
        func: Case body, ``func(count, context) -> CaseOutcome``
        count: Base iteration count at multiplier 1.0
    """
    category: str
    name: str
    func: Callable[[int, Any], CaseOutcome]
    count: int = 1
    description: str = field(default="", compare=False)

    def iterations(self, multiplier: float) -> int:
        """Iteration count for the given difficulty multiplier."""
        return math.ceil(self.count * multiplier)

    def __call__(self, multiplier: float = 1.0, context: Optional[Any] = None) -> CaseOutcome:
        """
        Run the case body once.

        Args:
            multiplier: Difficulty multiplier (>= 0)
            context: CaseContext; a bare context without resources is used if omitted

        Returns:
            The CaseOutcome produced by the body

        Raises:
            TypeError: If the body returned something other than a CaseOutcome
        """
        if context is None:
            from .runner import CaseContext
            context = CaseContext(multiplier=multiplier)

        outcome = self.func(self.iterations(multiplier), context)
        if not isinstance(outcome, CaseOutcome):
            raise TypeError(
                f"{self.category}::{self.name} returned {type(outcome).__name__}, "
                "expected CaseOutcome"
            )
        return outcome

    def __repr__(self) -> str:
        return f"<BenchmarkCase({self.category}::{self.name}, count={self.count})>"
