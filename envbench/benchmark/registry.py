"""
Ordered catalog of benchmark cases.
"""

import logging
from typing import Callable, Dict, Iterator, Optional, Tuple, Union

from .base import BenchmarkCase, CaseOutcome, DuplicateNameError

logger = logging.getLogger(__name__)

CaseFunc = Callable[[int, object], CaseOutcome]


class BenchmarkRegistry:
    """
    Ordered mapping of category -> case name -> BenchmarkCase.

    Iteration follows insertion order, so the order cases are
    registered in is the order they run and are reported in.

    Example:
        registry = BenchmarkRegistry()
        registry.register("core", "loops", bench_loops, count=5_000_000)

        @registry.benchmark("core", "json", count=50_000)
        def bench_json(count, ctx):
            ...
    """

    def __init__(self):
        self._categories: Dict[str, Dict[str, BenchmarkCase]] = {}

    def register(
        self,
        category: str,
        name: str,
        case: Union[BenchmarkCase, CaseFunc],
        count: int = 1,
    ) -> BenchmarkCase:
        """
        Register a case.

        Args:
            category: Category name
            name: Case name, unique within the category
            case: A BenchmarkCase, or a case body ``func(count, context)``
            count: Base iteration count when ``case`` is a plain function

        Returns:
            The registered BenchmarkCase

        Raises:
            DuplicateNameError: If (category, name) is already registered
            ValueError: If category or name is empty
        """
        if not category or not name:
            raise ValueError("Benchmark category and name must be non-empty")

        cases = self._categories.setdefault(category, {})
        if name in cases:
            raise DuplicateNameError(f"Benchmark already registered: {category}::{name}")

        if isinstance(case, BenchmarkCase):
            benchmark_case = BenchmarkCase(
                category=category,
                name=name,
                func=case.func,
                count=case.count,
                description=case.description,
            )
        else:
            benchmark_case = BenchmarkCase(
                category=category,
                name=name,
                func=case,
                count=count,
                description=(case.__doc__ or "").strip(),
            )

        cases[name] = benchmark_case
        logger.debug(f"Registered benchmark {category}::{name} (count={benchmark_case.count})")
        return benchmark_case

    def benchmark(self, category: str, name: str, count: int = 1) -> Callable[[CaseFunc], CaseFunc]:
        """Decorator form of ``register``."""
        def decorator(func: CaseFunc) -> CaseFunc:
            self.register(category, name, func, count=count)
            return func
        return decorator

    def iterate(self) -> Iterator[Tuple[str, str, BenchmarkCase]]:
        """Yield (category, name, case) triples in registration order."""
        for category, cases in self._categories.items():
            for name, case in cases.items():
                yield category, name, case

    def __iter__(self) -> Iterator[Tuple[str, str, BenchmarkCase]]:
        return self.iterate()

    def get(self, category: str, name: str) -> Optional[BenchmarkCase]:
        return self._categories.get(category, {}).get(name)

    def __contains__(self, key: Tuple[str, str]) -> bool:
        category, name = key
        return self.get(category, name) is not None

    def __len__(self) -> int:
        return sum(len(cases) for cases in self._categories.values())

    def __repr__(self) -> str:
        return f"<BenchmarkRegistry(categories={len(self._categories)}, cases={len(self)})>"
