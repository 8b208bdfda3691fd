"""Tests for kinship/db.py — database singleton and connection dependency."""
import kuzu

import kinship.db as db_mod
from kinship.db import get_conn


def test_get_database_creates_schema(tmp_path, monkeypatch):
    monkeypatch.setattr(db_mod, "DB_PATH", tmp_path / "nested" / "graph_data")
    monkeypatch.setattr(db_mod, "_database", None)
    database = db_mod.get_database()
    assert db_mod.get_database() is database
    conn = kuzu.Connection(database)
    assert conn.execute("MATCH (r:TreeRecord) RETURN count(*)").has_next()


def test_get_conn_yields_connection():
    """get_conn is a generator that yields a usable connection."""
    gen = get_conn()
    assert hasattr(gen, '__next__')
