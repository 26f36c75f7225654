"""
MySQL benchmarks against the scratch table of the MySQL provider.
Every case skips when the database is not available.
"""

from ..benchmark.base import CaseOutcome
from ..benchmark.metrics import now, throughput

SKIP_REASON = "database unavailable"


def _database(ctx):
    database = ctx.resources.database
    if not database.available:
        return None
    return database.handle


def bench_ping(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    db.connection.ping(reconnect=False)
    return CaseOutcome.success(1)


def _timed_queries(ctx, db, sql, count, args=None, unit="q/s"):
    """Run ``sql`` ``count`` times and record the rate."""
    started = now()
    with db.connection.cursor() as cursor:
        for _ in range(count):
            cursor.execute(sql, args)
    ctx.metrics.record(unit, throughput(count, started))


def bench_select_version(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    _timed_queries(ctx, db, "SELECT VERSION()", count)
    return CaseOutcome.success(count)


def bench_select_all(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    _timed_queries(ctx, db, f"SELECT * FROM `{db.table}`", count)
    return CaseOutcome.success(count)


def bench_select_cursor(count, ctx):
    """Select everything and walk the rows one by one."""
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    rows = 0
    for _ in range(count):
        with db.connection.cursor() as cursor:
            cursor.execute(f"SELECT * FROM `{db.table}`")
            for _row in cursor:
                rows += 1
    return CaseOutcome.success(rows)


def bench_seq_insert(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    _timed_queries(ctx, db, f"INSERT INTO `{db.table}` (name) VALUES ('test')", count)
    return CaseOutcome.success(count)


def bench_bulk_insert(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    if count:
        values = ",".join(f"('test{i}')" for i in range(count))
        db.execute(f"INSERT INTO `{db.table}` (name) VALUES {values}")
    return CaseOutcome.success(count)


def _timed_updates(ctx, db, count):
    started = now()
    with db.connection.cursor() as cursor:
        for i in range(count):
            cursor.execute(f"UPDATE `{db.table}` SET name = 'test' WHERE id = %s", (i,))
    ctx.metrics.record("q/s", throughput(count, started))


def bench_update(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    _timed_updates(ctx, db, count)
    return CaseOutcome.success(count)


def bench_update_with_index(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    db.execute(f"CREATE INDEX idx ON `{db.table}` (id)")
    try:
        _timed_updates(ctx, db, count)
    finally:
        db.execute(f"DROP INDEX idx ON `{db.table}`")
    return CaseOutcome.success(count)


def bench_transaction_insert(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    connection = db.connection
    started = now()
    with connection.cursor() as cursor:
        for _ in range(count):
            connection.begin()
            cursor.execute(f"INSERT INTO `{db.table}` (name) VALUES ('test')")
            connection.commit()
    ctx.metrics.record("t/s", throughput(count, started))
    return CaseOutcome.success(count)


def _timed_aes(ctx, db, function, count):
    data = "a" * 16
    started = now()
    with db.connection.cursor() as cursor:
        for _ in range(count):
            cursor.execute(f"SELECT {function}(%s, 'key')", (data,))
            cursor.fetchone()
    ctx.metrics.record("q/s", throughput(count, started))


def bench_aes_encrypt(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    _timed_aes(ctx, db, "AES_ENCRYPT", count)
    return CaseOutcome.success(count)


def bench_aes_decrypt(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    _timed_aes(ctx, db, "AES_DECRYPT", count)
    return CaseOutcome.success(count)


def bench_indexes(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    db.execute(f"CREATE INDEX idx_name ON `{db.table}` (name)")
    db.execute(f"DROP INDEX idx_name ON `{db.table}`")
    return CaseOutcome.success(1)


def bench_delete(count, ctx):
    db = _database(ctx)
    if db is None:
        return CaseOutcome.skip(SKIP_REASON)

    started = now()
    with db.connection.cursor() as cursor:
        for i in range(count):
            cursor.execute(f"DELETE FROM `{db.table}` WHERE id = %s", (i,))
    ctx.metrics.record("q/s", throughput(count, started))
    return CaseOutcome.success(count)


BENCHMARKS = {
    "ping": (bench_ping, 1),
    "select_version": (bench_select_version, 1_000),
    "select_all": (bench_select_all, 1_000),
    "select_cursor": (bench_select_cursor, 1_000),
    "seq_insert": (bench_seq_insert, 1_000),
    "bulk_insert": (bench_bulk_insert, 100_000),
    "update": (bench_update, 1_000),
    "update_with_index": (bench_update_with_index, 1_000),
    "transaction_insert": (bench_transaction_insert, 1_000),
    "aes_encrypt": (bench_aes_encrypt, 1_000),
    "aes_decrypt": (bench_aes_decrypt, 1_000),
    "indexes": (bench_indexes, 1),
    "delete": (bench_delete, 1_000),
}
