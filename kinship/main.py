import kuzu
from fastapi import FastAPI, Depends, HTTPException

from .db import get_conn
from . import store, schemas
from .consistency import check_reciprocity
from .family_tree import MalformedRecord
from .localization import describe
from .relations import Gender, RelationKind, parse_relation

app = FastAPI()


def _load_or_404(conn: kuzu.Connection, person_id: int):
    person = store.load_person(conn, person_id)
    if person is None:
        raise HTTPException(status_code=404, detail=f"Person {person_id} not found")
    return person


def _parse_or_400(identifier: str) -> RelationKind:
    kind = parse_relation(identifier)
    if kind is None:
        raise HTTPException(status_code=400, detail=f"Unknown relation {identifier!r}")
    return kind


def _relation_out(conn: kuzu.Connection, person, other_id: int) -> dict:
    tree = person.family_tree
    try:
        kind = tree.relation_of(other_id)
    except LookupError:
        kind = tree.stored_relation(other_id)
    other = store.get_person(conn, other_id)
    label = describe(kind, Gender.parse(other["gender"])) if other else None
    return {
        "person_id": other_id,
        "relation": kind.value,
        "relation_to": tree.relation_to(other_id).value,
        "label": label,
    }


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/people", response_model=list[schemas.PersonOut])
def people(conn: kuzu.Connection = Depends(get_conn)):
    return store.list_persons(conn)


@app.post("/people", response_model=schemas.PersonOut)
def add_person(body: schemas.PersonCreate, conn: kuzu.Connection = Depends(get_conn)):
    try:
        return store.create_person(conn, body.id, body.name, body.gender)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/people/{person_id}", response_model=schemas.PersonOut)
def get_person(person_id: int, conn: kuzu.Connection = Depends(get_conn)):
    person = store.get_person(conn, person_id)
    if person is None:
        raise HTTPException(status_code=404, detail=f"Person {person_id} not found")
    return person


@app.post("/players")
def add_player(body: schemas.PlayerCreate, conn: kuzu.Connection = Depends(get_conn)):
    return store.register_player(conn, body.id, body.username, body.gender)


@app.get("/people/{person_id}/relations", response_model=list[schemas.RelationOut])
def relations(person_id: int, conn: kuzu.Connection = Depends(get_conn)):
    person = _load_or_404(conn, person_id)
    return [_relation_out(conn, person, other_id) for other_id in person.family_tree]


@app.post("/people/{person_id}/relations", response_model=schemas.RelationOut)
def add_relation(person_id: int, body: schemas.RelationCreate,
                 conn: kuzu.Connection = Depends(get_conn)):
    person = _load_or_404(conn, person_id)
    kind = _parse_or_400(body.relation)
    try:
        person.family_tree.add(body.person_id, kind)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    store.save_tree(conn, person_id, person.family_tree)
    return _relation_out(conn, person, body.person_id)


@app.delete("/people/{person_id}/relations/{other_id}")
def remove_relation(person_id: int, other_id: int, conn: kuzu.Connection = Depends(get_conn)):
    person = _load_or_404(conn, person_id)
    if not person.family_tree.has_relation(other_id):
        raise HTTPException(status_code=404, detail=f"{other_id} is not related to {person_id}")
    person.family_tree.remove(other_id)
    store.save_tree(conn, person_id, person.family_tree)
    return {"ok": True}


@app.get("/people/{person_id}/record")
def get_record(person_id: int, conn: kuzu.Connection = Depends(get_conn)):
    person = _load_or_404(conn, person_id)
    return person.family_tree.serialize()


@app.put("/people/{person_id}/record", response_model=schemas.DecodeOut)
def put_record(person_id: int, record: dict, strict: bool = False,
               conn: kuzu.Connection = Depends(get_conn)):
    """Replace the person's tree with the entries of a flat record."""
    person = _load_or_404(conn, person_id)
    tree = person.family_tree
    for other_id in list(tree):
        tree.remove(other_id)
    try:
        result = tree.deserialize(record, strict=strict)
    except MalformedRecord as e:
        raise HTTPException(status_code=400, detail=e.result.as_dict())
    store.save_tree(conn, person_id, tree)
    return result.as_dict()


@app.get("/people/{person_id}/relatives/{relation}", response_model=schemas.PersonOut)
def find_relative(person_id: int, relation: str, conn: kuzu.Connection = Depends(get_conn)):
    kind = _parse_or_400(relation)
    world = store.load_world(conn)
    owner = world.get(person_id)
    if owner is None:
        raise HTTPException(status_code=404, detail=f"Person {person_id} not found")
    try:
        relative = world.find_relative(owner, kind)
    except LookupError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if relative is None:
        raise HTTPException(status_code=404, detail=f"No {kind.value} of {person_id} is loaded")
    return store.get_person(conn, relative.person_id)


@app.get("/consistency")
def consistency(conn: kuzu.Connection = Depends(get_conn)):
    return {"issues": check_reciprocity(store.load_world(conn).persons())}
