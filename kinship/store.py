"""Person, player, and family tree record storage — KuzuDB version."""
import json
import logging
from typing import Optional

import kuzu

from .family_tree import FamilyTree
from .relations import Gender, is_player_id
from .world import Person, PlayerRegistry, World

logger = logging.getLogger(__name__)


def _person_row(row) -> dict:
    return {"id": row[0], "name": row[1], "gender": row[2], "is_player": is_player_id(row[0])}


# ── Persons ──

def create_person(conn: kuzu.Connection, person_id: int, name: str, gender: str) -> dict:
    if person_id == 0:
        raise ValueError("Person id 0 is reserved")
    if get_person(conn, person_id) is not None:
        raise ValueError(f"Person {person_id} already exists")
    g = Gender.parse(gender)
    conn.execute(
        "CREATE (p:Person {id: $id, name: $name, gender: $gender})",
        {"id": person_id, "name": name, "gender": g.value}
    )
    return {"id": person_id, "name": name, "gender": g.value, "is_player": is_player_id(person_id)}


def get_person(conn: kuzu.Connection, person_id: int) -> dict | None:
    result = conn.execute(
        "MATCH (p:Person) WHERE p.id = $id RETURN p.id, p.name, p.gender",
        {"id": person_id}
    )
    if result.has_next():
        return _person_row(result.get_next())
    return None


def list_persons(conn: kuzu.Connection) -> list[dict]:
    result = conn.execute("MATCH (p:Person) RETURN p.id, p.name, p.gender ORDER BY p.id")
    persons = []
    while result.has_next():
        persons.append(_person_row(result.get_next()))
    return persons


def delete_person(conn: kuzu.Connection, person_id: int):
    """Delete a person and their stored tree. Other trees may still reference them."""
    conn.execute("MATCH (r:TreeRecord) WHERE r.owner_id = $id DELETE r", {"id": person_id})
    conn.execute("MATCH (p:Person) WHERE p.id = $id DELETE p", {"id": person_id})


# ── Players ──

def register_player(conn: kuzu.Connection, person_id: int, username: str, gender: str) -> dict:
    if not is_player_id(person_id):
        raise ValueError(f"Player ids are negative (got {person_id})")
    g = Gender.parse(gender)
    result = conn.execute("MATCH (u:Player) WHERE u.id = $id RETURN u.id", {"id": person_id})
    if result.has_next():
        conn.execute(
            "MATCH (u:Player) WHERE u.id = $id SET u.username = $username, u.gender = $gender",
            {"id": person_id, "username": username, "gender": g.value}
        )
    else:
        conn.execute(
            "CREATE (u:Player {id: $id, username: $username, gender: $gender})",
            {"id": person_id, "username": username, "gender": g.value}
        )
    return {"id": person_id, "username": username, "gender": g.value}


def load_player_registry(conn: kuzu.Connection) -> PlayerRegistry:
    """Read every player's properties into an in-memory registry."""
    registry = PlayerRegistry()
    result = conn.execute("MATCH (u:Player) RETURN u.id, u.username, u.gender")
    while result.has_next():
        row = result.get_next()
        registry.register(row[0], row[1], Gender.parse(row[2]))
    return registry


# ── Family tree records ──

def save_tree(conn: kuzu.Connection, owner_id: int, tree: FamilyTree) -> dict:
    record = tree.serialize()
    data = json.dumps(record)
    result = conn.execute(
        "MATCH (r:TreeRecord) WHERE r.owner_id = $id RETURN r.owner_id", {"id": owner_id}
    )
    if result.has_next():
        conn.execute(
            "MATCH (r:TreeRecord) WHERE r.owner_id = $id SET r.data = $data",
            {"id": owner_id, "data": data}
        )
    else:
        conn.execute(
            "CREATE (r:TreeRecord {owner_id: $id, data: $data})",
            {"id": owner_id, "data": data}
        )
    return record


def load_record(conn: kuzu.Connection, owner_id: int) -> dict:
    """The stored flat record for ``owner_id``; empty if none was saved."""
    result = conn.execute(
        "MATCH (r:TreeRecord) WHERE r.owner_id = $id RETURN r.data", {"id": owner_id}
    )
    if not result.has_next():
        return {}
    return json.loads(result.get_next()[0])


def load_person(conn: kuzu.Connection, person_id: int,
                players: Optional[PlayerRegistry] = None) -> Person | None:
    """Rebuild a person with their family tree. Malformed entries are logged and skipped."""
    row = get_person(conn, person_id)
    if row is None:
        return None
    if players is None:
        players = load_player_registry(conn)
    person = Person(row["id"], row["name"], Gender.parse(row["gender"]),
                    gender_source=players.gender_of)
    person.family_tree.deserialize(load_record(conn, person_id))
    return person


def load_world(conn: kuzu.Connection) -> World:
    world = World(load_player_registry(conn))
    for row in list_persons(conn):
        world.add(load_person(conn, row["id"], world.players))
    logger.debug("Loaded %d persons", len(world.persons()))
    return world
