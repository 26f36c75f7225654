"""Shared pytest fixtures and fakes for envbench.

Provides:
- FakeClock: scripted time source for deterministic timing
- FakeResource: BaseResource returning a fixed handle
- FakeConnection / FakeCursor: in-memory stand-ins for a PyMySQL connection
"""

from __future__ import annotations

import io
from typing import Any, Iterable, List, Optional

import pytest

from envbench.benchmark.base import CaseOutcome, ResourceUnavailableError
from envbench.benchmark.registry import BenchmarkRegistry
from envbench.benchmark.reporter import Reporter
from envbench.providers import ResourceSet
from envbench.providers.base import BaseResource


class FakeClock:
    """Returns the scripted timestamps in order, then keeps the last one."""

    def __init__(self, times: Iterable[float]) -> None:
        self._times = list(times)
        self.calls = 0

    def __call__(self) -> float:
        index = min(self.calls, len(self._times) - 1)
        self.calls += 1
        return self._times[index]


class FakeResource(BaseResource):
    """Resource that hands out ``handle`` or fails with ``error``."""

    name = "fake"
    display_name = "Fake resource"

    def __init__(self, handle: Any = "handle", error: Optional[str] = None) -> None:
        super().__init__()
        self._fake_handle = handle
        self._fake_error = error
        self.released = 0

    def _acquire(self) -> Any:
        if self._fake_error:
            raise ResourceUnavailableError(self._fake_error)
        return self._fake_handle

    def _release(self, handle: Any) -> None:
        self.released += 1


class FakeCursor:
    """Records executed statements on its connection."""

    def __init__(self, connection: "FakeConnection") -> None:
        self.connection = connection
        self._rows: List[tuple] = []

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def execute(self, sql: str, args: Any = None) -> int:
        self.connection.executed.append((sql, args))
        for fragment, error in self.connection.failures.items():
            if fragment in sql:
                raise error
        if sql.startswith("SELECT schema_name"):
            return 1 if self.connection.schema_exists else 0
        if sql.startswith("SELECT *"):
            self._rows = [(i, f"test{i}") for i in range(3)]
            return len(self._rows)
        if sql.startswith("SELECT"):
            self._rows = [("x",)]
            return 1
        return 1

    def fetchone(self) -> Optional[tuple]:
        return self._rows.pop(0) if self._rows else None

    def __iter__(self):
        return iter(self.fetchone, None)

    def close(self) -> None:
        self.connection.cursors_closed += 1


class FakeConnection:
    """Minimal PyMySQL-like connection."""

    def __init__(self, server_version: str = "8.0.36", schema_exists: bool = True) -> None:
        self.server_version = server_version
        self.schema_exists = schema_exists
        self.executed: List[tuple] = []
        self.failures: dict = {}
        self.selected_db: Optional[str] = None
        self.closed = False
        self.pings = 0
        self.commits = 0
        self.begins = 0
        self.cursors_closed = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def select_db(self, name: str) -> None:
        self.selected_db = name

    def ping(self, reconnect: bool = True) -> None:
        self.pings += 1

    def begin(self) -> None:
        self.begins += 1

    def commit(self) -> None:
        self.commits += 1

    def close(self) -> None:
        self.closed = True

    def statements(self) -> List[str]:
        return [sql for sql, _ in self.executed]


def ok_case(count: int, ctx: Any) -> CaseOutcome:
    return CaseOutcome.success(count)


def skip_case(count: int, ctx: Any) -> CaseOutcome:
    return CaseOutcome.skip("unsupported")


def boom_case(count: int, ctx: Any) -> CaseOutcome:
    raise RuntimeError("bad")


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> Reporter:
    return Reporter(width=55, stream=output)


@pytest.fixture
def registry() -> BenchmarkRegistry:
    return BenchmarkRegistry()


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def offline_resources() -> ResourceSet:
    """Resources that are never acquired."""
    return ResourceSet.unavailable()


@pytest.fixture
def local_resources(tmp_path) -> ResourceSet:
    """Acquired scratch + randomness; no database."""
    from envbench.providers import OpenSSLRandomProvider, ScratchDirectory, SystemRandomProvider

    resources = ResourceSet(
        database=FakeResource(error="database unavailable"),
        scratch=ScratchDirectory(parent=str(tmp_path)),
        system_random=SystemRandomProvider(),
        openssl_random=OpenSSLRandomProvider(),
    )
    with resources:
        yield resources
