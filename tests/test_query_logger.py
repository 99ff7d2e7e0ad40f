import logging
import sys
from pathlib import Path

from sqlalchemy import create_engine, text

sys.path.append(str(Path(__file__).resolve().parents[1]))

from api.app.obs import queries  # noqa: E402


def test_slow_queries_logged_without_parameters(monkeypatch, caplog):
    monkeypatch.setattr(queries, "SLOW_QUERY_MS", -1)
    engine = create_engine("sqlite://")
    queries.add_query_logger(engine, "unit")
    with caplog.at_level(logging.INFO, logger="obs"):
        with engine.connect() as conn:
            conn.execute(text("SELECT :email"), {"email": "guest@example.com"})
    assert any("slow query" in m and "db=unit" in m for m in caplog.messages)
    assert all("guest@example.com" not in m for m in caplog.messages)


def test_fast_queries_sampled(monkeypatch, caplog):
    monkeypatch.setattr(queries, "SLOW_QUERY_MS", 10_000)
    monkeypatch.setattr(queries, "SAMPLE_RATE", 0)
    engine = create_engine("sqlite://")
    queries.add_query_logger(engine, "unit")
    with caplog.at_level(logging.INFO, logger="obs"):
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    assert caplog.messages == []


def test_long_statements_shortened():
    short = queries._shorten("SELECT\n  " + "x, " * 200 + "1")
    assert len(short) == queries.MAX_SQL_CHARS
    assert short.endswith("...")
