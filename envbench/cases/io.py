"""
Filesystem benchmarks. They run inside the scratch directory and
remove their own files, even when they fail half way.
"""

import shutil
import zipfile
from pathlib import Path

from ..benchmark.base import CaseOutcome


def _scratch(ctx):
    """Scratch directory path, or None when unavailable."""
    scratch = ctx.resources.scratch
    if not scratch.available:
        return None
    return Path(scratch.handle)


def bench_file_read(count, ctx):
    root = _scratch(ctx)
    if root is None:
        return CaseOutcome.skip("scratch directory unavailable")

    path = root / "test.txt"
    path.write_text("test")
    try:
        for _ in range(count):
            path.read_text()
    finally:
        path.unlink(missing_ok=True)
    return CaseOutcome.success(count)


def bench_file_write(count, ctx):
    root = _scratch(ctx)
    if root is None:
        return CaseOutcome.skip("scratch directory unavailable")

    path = root / "test.txt"
    try:
        for i in range(count):
            path.write_text(f"test {i}")
    finally:
        path.unlink(missing_ok=True)
    return CaseOutcome.success(count)


def bench_file_zip(count, ctx):
    root = _scratch(ctx)
    if root is None:
        return CaseOutcome.skip("scratch directory unavailable")

    source = root / "test.txt"
    archive = root / "test.zip"
    source.write_text("test")
    try:
        for _ in range(count):
            with zipfile.ZipFile(archive, "w") as zf:
                zf.write(source, arcname=source.name)
    finally:
        source.unlink(missing_ok=True)
        archive.unlink(missing_ok=True)
    return CaseOutcome.success(count)


def bench_file_unzip(count, ctx):
    root = _scratch(ctx)
    if root is None:
        return CaseOutcome.skip("scratch directory unavailable")

    source = root / "test.txt"
    archive = root / "test.zip"
    target = root / "test"
    source.write_text("test")
    try:
        with zipfile.ZipFile(archive, "w") as zf:
            zf.write(source, arcname=source.name)
        for _ in range(count):
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(target)
    finally:
        source.unlink(missing_ok=True)
        archive.unlink(missing_ok=True)
        shutil.rmtree(target, ignore_errors=True)
    return CaseOutcome.success(count)


BENCHMARKS = {
    "file_read": (bench_file_read, 1_000),
    "file_write": (bench_file_write, 1_000),
    "file_zip": (bench_file_zip, 1_000),
    "file_unzip": (bench_file_unzip, 1_000),
}
