"""
Benchmark catalog.
Each category module exposes BENCHMARKS: name -> (case body, base count).
"""

from typing import Iterable, Optional

from ..benchmark.registry import BenchmarkRegistry
from . import core, io, mysql, rand

# Registry of available categories, in run order
CATEGORIES = {
    "core": core.BENCHMARKS,
    "io": io.BENCHMARKS,
    "rand": rand.BENCHMARKS,
    "mysql": mysql.BENCHMARKS,
}


def build_registry(categories: Optional[Iterable[str]] = None) -> BenchmarkRegistry:
    """
    Build a registry with the built-in benchmarks.

    Args:
        categories: Category names to include (default: all, in catalog order)

    Returns:
        BenchmarkRegistry

    Raises:
        ValueError: If a category is unknown
    """
    selected = list(CATEGORIES) if categories is None else list(categories)

    registry = BenchmarkRegistry()
    for category in selected:
        benchmarks = CATEGORIES.get(category)
        if benchmarks is None:
            available = ", ".join(CATEGORIES.keys())
            raise ValueError(f"Unknown benchmark category: {category}. Available: {available}")

        for name, (func, count) in benchmarks.items():
            registry.register(category, name, func, count=count)

    return registry


def list_categories() -> list:
    """List all available category names."""
    return list(CATEGORIES.keys())


__all__ = [
    "CATEGORIES",
    "build_registry",
    "list_categories",
]
