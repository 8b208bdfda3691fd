"""Persons, the player properties store, and the set of loaded persons."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .family_tree import FamilyTree, GenderSource
from .relations import Gender, RelationKind, is_player_id

logger = logging.getLogger(__name__)


class UnknownPlayer(LookupError):
    pass


@dataclass
class Person:
    person_id: int
    name: str
    gender: Gender
    family_tree: Optional[FamilyTree] = None
    gender_source: Optional[GenderSource] = field(default=None, repr=False)

    def __post_init__(self):
        if self.person_id == 0:
            raise ValueError("person id 0 is reserved")
        if self.family_tree is None:
            self.family_tree = FamilyTree(self.gender, self.person_id, self.gender_source)

    @property
    def is_player(self) -> bool:
        return is_player_id(self.person_id)


class PlayerRegistry:
    """Per-player properties keyed by username, with an id -> username index.

    Reads are in-memory only. Use ``registry.gender_of`` as a FamilyTree
    gender source.
    """

    def __init__(self):
        self._usernames: dict[int, str] = {}
        self._properties: dict[str, dict] = {}

    def register(self, person_id: int, username: str, gender: Gender) -> dict:
        if not is_player_id(person_id):
            raise ValueError(f"Player ids are negative (got {person_id})")
        self._usernames[person_id] = username
        props = self._properties.setdefault(username, {})
        props["gender"] = gender
        return props

    def username_of(self, person_id: int) -> str:
        try:
            return self._usernames[person_id]
        except KeyError:
            raise UnknownPlayer(f"No player with id {person_id}") from None

    def properties(self, username: str) -> dict:
        try:
            return self._properties[username]
        except KeyError:
            raise UnknownPlayer(f"No properties for player {username!r}") from None

    def gender_of(self, person_id: int) -> Gender:
        return self.properties(self.username_of(person_id))["gender"]

    def __contains__(self, person_id: int) -> bool:
        return person_id in self._usernames

    def __len__(self) -> int:
        return len(self._usernames)


class World:
    """The persons currently loaded, plus the player registry their trees use."""

    def __init__(self, players: Optional[PlayerRegistry] = None):
        self.players = players if players is not None else PlayerRegistry()
        self._persons: list[Person] = []

    def spawn(self, person_id: int, name: str, gender: Gender) -> Person:
        """Create a person whose tree resolves player genders through this world."""
        person = Person(person_id, name, gender, gender_source=self.players.gender_of)
        self.add(person)
        return person

    def add(self, person: Person):
        self._persons.append(person)

    def remove(self, person_id: int):
        self._persons = [p for p in self._persons if p.person_id != person_id]

    def get(self, person_id: int) -> Optional[Person]:
        for person in self._persons:
            if person.person_id == person_id:
                return person
        return None

    def persons(self) -> list[Person]:
        return list(self._persons)

    def find_relative(self, owner: Person, kind: RelationKind) -> Optional[Person]:
        """First loaded person in ``owner``'s tree whose own tree calls the owner ``kind``.

        Linear in entries times loaded persons; both are small.
        """
        for person_id in owner.family_tree:
            for candidate in self._persons:
                if candidate.person_id != person_id:
                    continue
                if candidate.family_tree.relation_of(owner) is kind:
                    return candidate
        logger.debug("No loaded relative of %s with relation %s", owner.person_id, kind.value)
        return None
