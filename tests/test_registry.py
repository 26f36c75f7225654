"""Tests for the benchmark registry."""

from __future__ import annotations

import pytest

from conftest import boom_case, ok_case, skip_case
from envbench.benchmark.base import BenchmarkCase, CaseOutcome, DuplicateNameError


class TestRegistration:
    def test_register_returns_case(self, registry) -> None:
        case = registry.register("core", "ok", ok_case, count=10)

        assert isinstance(case, BenchmarkCase)
        assert (case.category, case.name, case.count) == ("core", "ok", 10)
        assert registry.get("core", "ok") is case
        assert ("core", "ok") in registry

    def test_duplicate_name_fails_fast(self, registry) -> None:
        registry.register("core", "ok", ok_case)
        with pytest.raises(DuplicateNameError, match="core::ok"):
            registry.register("core", "ok", skip_case)

    def test_same_name_in_other_category_is_allowed(self, registry) -> None:
        registry.register("core", "ok", ok_case)
        registry.register("io", "ok", ok_case)
        assert len(registry) == 2

    @pytest.mark.parametrize("category,name", [("", "ok"), ("core", "")])
    def test_empty_names_rejected(self, registry, category, name) -> None:
        with pytest.raises(ValueError):
            registry.register(category, name, ok_case)

    def test_register_existing_case_object(self, registry) -> None:
        original = BenchmarkCase("tmp", "tmp", ok_case, count=7)
        case = registry.register("core", "copied", original)
        assert (case.category, case.name, case.count) == ("core", "copied", 7)

    def test_decorator(self, registry) -> None:
        @registry.benchmark("core", "decorated", count=3)
        def bench(count, ctx):
            """Decorated case."""
            return CaseOutcome.success(count)

        case = registry.get("core", "decorated")
        assert case.func is bench
        assert case.description == "Decorated case."


class TestIteration:
    def test_insertion_order(self, registry) -> None:
        registry.register("core", "b", ok_case)
        registry.register("io", "a", ok_case)
        registry.register("core", "a", ok_case)

        triples = [(c, n) for c, n, _ in registry.iterate()]
        # categories keep first-seen order; cases keep insertion order within them
        assert triples == [("core", "b"), ("core", "a"), ("io", "a")]

    def test_iteration_is_restartable(self, registry) -> None:
        registry.register("core", "ok", ok_case)
        registry.register("core", "boom", boom_case)

        assert list(registry.iterate()) == list(registry.iterate())
        assert [n for _, n, _ in registry] == ["ok", "boom"]

    def test_empty_registry(self, registry) -> None:
        assert list(registry.iterate()) == []
        assert len(registry) == 0


class TestBenchmarkCase:
    def test_iterations_scale_with_multiplier(self) -> None:
        case = BenchmarkCase("core", "x", ok_case, count=3)
        assert case.iterations(1.0) == 3
        assert case.iterations(0.5) == 2
        assert case.iterations(0) == 0

    def test_call_without_context(self) -> None:
        case = BenchmarkCase("core", "x", ok_case, count=4)
        outcome = case(2.0)
        assert outcome == CaseOutcome.success(8)

    def test_non_outcome_return_is_type_error(self) -> None:
        case = BenchmarkCase("core", "x", lambda count, ctx: count)
        with pytest.raises(TypeError, match="expected CaseOutcome"):
            case(1.0)
