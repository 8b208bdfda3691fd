from typing import Optional, Literal

from pydantic import BaseModel, field_validator

from .relations import RelationKind, parse_relation


class TreeEntry(BaseModel):
    """One decoded (person id, relation) pair of a flat record."""
    person_id: int
    relation: RelationKind

    @field_validator("person_id")
    @classmethod
    def validate_person_id(cls, v):
        if v == 0:
            raise ValueError("person id 0 is reserved")
        return v

    @field_validator("relation", mode="before")
    @classmethod
    def validate_relation(cls, v):
        if isinstance(v, RelationKind):
            kind = v
        else:
            kind = parse_relation(v) if isinstance(v, str) else None
            if kind is None:
                raise ValueError(f"unknown relation {v!r}")
        if kind is RelationKind.NONE:
            raise ValueError("relation None cannot be stored")
        return kind


class PersonCreate(BaseModel):
    id: int
    name: str
    gender: Literal["Male", "Female", "M", "F"] = "Male"

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if v == 0:
            raise ValueError("id 0 is reserved")
        return v


class PersonOut(BaseModel):
    id: int
    name: str
    gender: str
    is_player: bool


class PlayerCreate(BaseModel):
    id: int
    username: str
    gender: Literal["Male", "Female", "M", "F"] = "Male"

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if v >= 0:
            raise ValueError("player ids are negative")
        return v


class RelationCreate(BaseModel):
    person_id: int
    relation: str


class RelationOut(BaseModel):
    person_id: int
    relation: str
    relation_to: str
    label: Optional[str] = None


class DecodeOut(BaseModel):
    entries: int
    terminated_by: str
    errors: list[dict]
