"""
Random number generation benchmarks.
"""

import random
import secrets

from ..benchmark.base import CaseOutcome


def bench_random(count, ctx):
    for _ in range(count):
        random.random()
    return CaseOutcome.success(count)


def bench_randint(count, ctx):
    """Mersenne Twister integers."""
    for i in range(count):
        random.randint(0, i)
    return CaseOutcome.success(count)


def bench_randbelow(count, ctx):
    if not ctx.resources.system_random.available:
        return CaseOutcome.skip("system CSPRNG unavailable")

    for i in range(count):
        secrets.randbelow(i + 1)
    return CaseOutcome.success(count)


def bench_token_bytes(count, ctx):
    if not ctx.resources.system_random.available:
        return CaseOutcome.skip("system CSPRNG unavailable")

    for _ in range(count):
        secrets.token_bytes(32)
    return CaseOutcome.success(count)


def bench_ssl_rand_bytes(count, ctx):
    provider = ctx.resources.openssl_random
    if not provider.available:
        return CaseOutcome.skip("OpenSSL CSPRNG unavailable")

    rand_bytes = provider.handle
    for _ in range(count):
        rand_bytes(32)
    return CaseOutcome.success(count)


BENCHMARKS = {
    "random": (bench_random, 1_000_000),
    "randint": (bench_randint, 500_000),
    "randbelow": (bench_randbelow, 500_000),
    "token_bytes": (bench_token_bytes, 500_000),
    "ssl_rand_bytes": (bench_ssl_rand_bytes, 500_000),
}
