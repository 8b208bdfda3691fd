"""Per-owner relation map: who is related to the owner, and how."""
import logging
from typing import Any, Callable, Iterator, Mapping, MutableMapping, Optional

from .record import DecodeResult, read_entries, write_entries
from .relations import (
    Gender,
    RelationKind,
    gendered,
    is_player_id,
    opposing_of,
)

logger = logging.getLogger(__name__)

GenderSource = Callable[[int], Gender]

# Umbrella kinds that are resolved against the related person's own gender.
_RESOLVED_ON_LOOKUP = (RelationKind.GRANDPARENT, RelationKind.GREATGRANDPARENT)


class InvariantViolation(ValueError):
    """A mutation would store something the record format cannot round-trip."""


class MalformedRecord(ValueError):
    """A persisted record held pairs that could not be decoded."""

    def __init__(self, result: DecodeResult):
        self.result = result
        messages = "; ".join(e["message"] for e in result.errors)
        super().__init__(f"{len(result.errors)} malformed family tree entries: {messages}")


def _resolve_id(person) -> Optional[int]:
    """Accept a bare id or anything with a ``person_id``; None passes through."""
    if person is None:
        return None
    if isinstance(person, int):
        return person
    return person.person_id


class FamilyTree:
    """Relations of other persons to one owner.

    Entries read "person X is the owner's K". Order is insertion order, and
    overwriting an entry keeps its position; serialization and
    ``remove_kind`` depend on it.

    Not thread-safe. All calls for one tree are expected to come from a
    single simulation thread.
    """

    def __init__(self, owner_gender: Gender, owner_id: Optional[int] = None,
                 gender_source: Optional[GenderSource] = None,
                 resolves: Callable[[int], bool] = is_player_id):
        self.owner_gender = owner_gender
        self.owner_id = owner_id
        self.gender_source = gender_source
        self.resolves = resolves
        self._relations: dict[int, RelationKind] = {}

    # ── mutation ──

    def add(self, person, kind: RelationKind):
        """Store ``kind`` for ``person``. A missing person (None) is ignored."""
        person_id = _resolve_id(person)
        if person_id is None:
            return
        if person_id == 0:
            raise InvariantViolation("person id 0 is reserved and cannot be stored")
        if kind is None or kind is RelationKind.NONE:
            raise InvariantViolation("relation None cannot be stored")
        if not kind.identifier:
            raise InvariantViolation(f"relation {kind.name} has an empty identifier")
        self._relations[person_id] = kind

    def remove(self, person):
        person_id = _resolve_id(person)
        if person_id is not None:
            self._relations.pop(person_id, None)

    def remove_kind(self, kind: RelationKind):
        """Remove the LAST entry (in traversal order) whose kind is ``kind``.

        Only one entry goes, even when several share the kind. Callers that
        want every match removed should loop over ``find_all_ids_with_kind``.
        """
        removal_key = None
        for person_id, stored in self._relations.items():
            if stored is kind:
                removal_key = person_id
        if removal_key is not None:
            del self._relations[removal_key]

    # ── queries ──

    def has_relation(self, person) -> bool:
        return _resolve_id(person) in self._relations

    def relation_of(self, person) -> RelationKind:
        """What ``person`` is to the owner.

        Grandparent and Greatgrandparent are stored gender-neutral for ids the
        gender source is responsible for (players, by default); those are
        returned as the gendered variant. Lookup failures propagate.
        """
        person_id = _resolve_id(person)
        kind = self._relations.get(person_id)
        if kind is None:
            return RelationKind.NONE
        if kind in _RESOLVED_ON_LOOKUP and self.resolves(person_id):
            if self.gender_source is None:
                raise LookupError(f"No gender source to resolve {kind.value} for {person_id}")
            return gendered(kind, self.gender_source(person_id))
        return kind

    def stored_relation(self, person) -> RelationKind:
        """The kind exactly as stored, without umbrella resolution."""
        return self._relations.get(_resolve_id(person), RelationKind.NONE)

    def relation_to(self, person) -> RelationKind:
        """What the owner is to ``person``, from the raw stored kind."""
        return opposing_of(self.owner_gender, self.stored_relation(person))

    def find_id_with_kind(self, kind: RelationKind) -> Optional[int]:
        for person_id, stored in self._relations.items():
            if stored is kind:
                return person_id
        return None

    def find_all_ids_with_kind(self, kind: RelationKind) -> list[int]:
        return [person_id for person_id, stored in self._relations.items() if stored is kind]

    def list_player_ids(self) -> set[int]:
        return {person_id for person_id in self._relations if is_player_id(person_id)}

    def items(self):
        return self._relations.items()

    def __len__(self) -> int:
        return len(self._relations)

    def __contains__(self, person) -> bool:
        return self.has_relation(person)

    def __iter__(self) -> Iterator[int]:
        return iter(self._relations)

    # ── persistence ──

    def serialize(self, record: Optional[MutableMapping[str, Any]] = None,
                  prefix: str = "") -> MutableMapping[str, Any]:
        return write_entries(self._relations.items(), record, prefix)

    def deserialize(self, record: Mapping[str, Any], strict: bool = False,
                    prefix: str = "") -> DecodeResult:
        """Merge the entries of ``record`` into this tree.

        Valid pairs are always applied. Malformed ones are skipped and
        reported; in strict mode they raise ``MalformedRecord`` afterwards.
        """
        entries, result = read_entries(record, prefix)
        for entry in entries:
            self.add(entry.person_id, entry.relation)
        for error in result.errors:
            logger.warning("Family tree of %s: %s", self.owner_id, error["message"])
        if strict and result.errors:
            raise MalformedRecord(result)
        return result

    def copy(self) -> "FamilyTree":
        tree = FamilyTree(self.owner_gender, self.owner_id, self.gender_source, self.resolves)
        tree._relations = dict(self._relations)
        return tree

    def dump(self):
        logger.info("Family tree of %s (%s)", self.owner_id, self.owner_gender.value)
        for person_id, kind in self._relations.items():
            logger.info("%s : %s", person_id, kind.value)

    def __repr__(self) -> str:
        return f"FamilyTree(owner_id={self.owner_id!r}, entries={len(self._relations)})"
