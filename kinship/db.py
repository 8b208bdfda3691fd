"""KuzuDB embedded database connection."""
import os
import logging
import kuzu
from pathlib import Path

logger = logging.getLogger(__name__)

DB_PATH = Path(os.environ.get("DB_PATH", Path(__file__).resolve().parent.parent / "graph_data"))
_database = None


def get_database():
    global _database
    if _database is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        _database = kuzu.Database(str(DB_PATH))
        _init_schema(_database)
        logger.info("Opened kinship database at %s", DB_PATH)
    return _database


def _init_schema(db):
    conn = kuzu.Connection(db)

    # ── Persons (players and non-players share the id space) ──
    conn.execute(
        "CREATE NODE TABLE IF NOT EXISTS Person("
        "id INT64, name STRING, gender STRING, "
        "PRIMARY KEY(id))"
    )

    # ── Per-player properties ──
    conn.execute(
        "CREATE NODE TABLE IF NOT EXISTS Player("
        "id INT64, username STRING, gender STRING, "
        "PRIMARY KEY(id))"
    )

    # ── Flat family tree record per owner, JSON-encoded ──
    conn.execute(
        "CREATE NODE TABLE IF NOT EXISTS TreeRecord("
        "owner_id INT64, data STRING, "
        "PRIMARY KEY(owner_id))"
    )


def get_conn():
    db = get_database()
    conn = kuzu.Connection(db)
    try:
        yield conn
    finally:
        pass
