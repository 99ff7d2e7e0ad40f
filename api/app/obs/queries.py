from __future__ import annotations

"""Timing hooks that log slow or sampled SQL statements."""

import hashlib
import logging
import os
import random
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

SLOW_QUERY_MS = int(os.getenv("DB_SLOW_QUERY_MS", "200"))
SAMPLE_RATE = float(os.getenv("DB_QUERY_SAMPLE_RATE", "0.01"))
MAX_SQL_CHARS = 200

logger = logging.getLogger("obs")


def _shorten(statement: str) -> str:
    sql = " ".join(statement.split())
    if len(sql) > MAX_SQL_CHARS:
        sql = sql[: MAX_SQL_CHARS - 3] + "..."
    return sql


def add_query_logger(engine: Engine, label: str) -> None:
    """Log statements on ``engine`` slower than ``SLOW_QUERY_MS``.

    Faster statements are logged at ``SAMPLE_RATE``. Bound parameters are
    never written out; only a short hash of them is, so submitted comments
    and e-mail addresses stay out of the logs.
    """

    def before_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        context._query_start_time = time.perf_counter()

    def after_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        total_ms = (time.perf_counter() - context._query_start_time) * 1000
        params_hash = hashlib.sha256(repr(parameters).encode()).hexdigest()[:8]
        if total_ms > SLOW_QUERY_MS:
            log = logger.warning
            prefix = "slow query"
        elif random.random() < SAMPLE_RATE:
            log = logger.info
            prefix = "query"
        else:
            return
        log(
            "%s %dms db=%s sql=%s params=%s",
            prefix,
            int(total_ms),
            label,
            _shorten(statement),
            params_hash,
        )

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    event.listen(engine, "after_cursor_execute", after_cursor_execute)
