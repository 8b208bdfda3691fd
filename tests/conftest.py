"""Shared fixtures for the kinship test suite."""
import pytest
import kuzu
from fastapi.testclient import TestClient

from kinship.db import _init_schema, get_conn
from kinship import store
from kinship.family_tree import FamilyTree
from kinship.relations import Gender, RelationKind
from kinship.world import World


# ── Database fixtures ──

@pytest.fixture
def db_path(tmp_path):
    """Temp location for a fresh KuzuDB."""
    return tmp_path / "test_db"


@pytest.fixture
def db(db_path):
    """Initialized KuzuDB with the full schema."""
    database = kuzu.Database(str(db_path))
    _init_schema(database)
    return database


@pytest.fixture
def conn(db):
    """KuzuDB connection for unit tests."""
    return kuzu.Connection(db)


# ── In-memory fixtures ──

@pytest.fixture
def world():
    """World with one registered male player, -17 ("steve")."""
    w = World()
    w.players.register(-17, "steve", Gender.MALE)
    return w


@pytest.fixture
def owner_tree(world):
    """Female owner: 5001 is her Son, 5002 her Daughter, player -17 her Grandparent."""
    tree = FamilyTree(Gender.FEMALE, owner_id=4000, gender_source=world.players.gender_of)
    tree.add(5001, RelationKind.SON)
    tree.add(5002, RelationKind.DAUGHTER)
    tree.add(-17, RelationKind.GRANDPARENT)
    return tree


# ── Stored fixtures ──

@pytest.fixture
def stored_family(conn):
    """Mother 100 and son 101 with reciprocal trees, plus player -17 as her father."""
    mom = store.create_person(conn, 100, "Mom", "F")
    son = store.create_person(conn, 101, "Son", "M")
    store.create_person(conn, -17, "steve", "M")
    store.register_player(conn, -17, "steve", "M")

    mom_tree = FamilyTree(Gender.FEMALE, 100)
    mom_tree.add(101, RelationKind.SON)
    mom_tree.add(-17, RelationKind.FATHER)
    store.save_tree(conn, 100, mom_tree)

    son_tree = FamilyTree(Gender.MALE, 101)
    son_tree.add(100, RelationKind.MOTHER)
    son_tree.add(-17, RelationKind.GRANDPARENT)
    store.save_tree(conn, 101, son_tree)
    return {"mom": mom, "son": son}


# ── FastAPI app fixtures ──

@pytest.fixture
def app_with_db(db):
    """FastAPI app with dependency override pointing at test DB."""
    from kinship.main import app

    def override_get_conn():
        c = kuzu.Connection(db)
        try:
            yield c
        finally:
            pass

    app.dependency_overrides[get_conn] = override_get_conn
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_with_db):
    return TestClient(app_with_db, raise_server_exceptions=False)
