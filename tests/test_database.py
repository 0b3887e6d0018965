"""
Tests for engine construction and slow query logging
"""

import logging

from sqlalchemy import create_engine, text

from petcare.database import build_engine, watch_slow_queries


def test_sqlite_engine_is_usable_across_threads():
    engine = build_engine("sqlite://")

    assert engine.dialect.name == "sqlite"
    with engine.connect() as conn:
        assert conn.execute(text("select 1")).scalar() == 1


def test_queries_over_threshold_are_logged(caplog):
    engine = create_engine("sqlite://")
    watch_slow_queries(engine, threshold=-1)

    with caplog.at_level(logging.WARNING, logger="petcare.database"):
        with engine.connect() as conn:
            conn.execute(text("select 1"))

    assert any("Slow query" in record.message for record in caplog.records)


def test_fast_queries_are_not_logged(caplog):
    engine = create_engine("sqlite://")
    watch_slow_queries(engine, threshold=60)

    with caplog.at_level(logging.WARNING, logger="petcare.database"):
        with engine.connect() as conn:
            conn.execute(text("select 1"))

    assert not [record for record in caplog.records if "Slow query" in record.message]
