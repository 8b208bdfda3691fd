"""Cross-check reciprocal entries across the trees of loaded persons."""
from typing import Iterable

from .relations import RelationKind, gendered, opposing_of


def check_reciprocity(persons: Iterable) -> list[dict]:
    """Report entries whose reciprocal entry is missing or disagrees.

    If A stores "B is my K", B should store A as ``opposing_of(A.gender, K)``.
    An umbrella kind stored by B passes when its variant for A's gender is the
    expected kind. Persons outside ``persons`` are not checked. Nothing is
    modified.
    """
    by_id = {p.person_id: p for p in persons}
    issues = []
    for owner in by_id.values():
        for person_id, kind in owner.family_tree.items():
            other = by_id.get(person_id)
            if other is None:
                continue
            expected = opposing_of(owner.gender, kind)
            if expected is RelationKind.NONE:
                continue
            found = other.family_tree.stored_relation(owner.person_id)
            if found is RelationKind.NONE:
                issues.append({
                    "type": "missing", "owner_id": owner.person_id, "person_id": person_id,
                    "expected": expected.value, "found": None,
                })
            elif found is not expected and gendered(found, owner.gender) is not expected:
                issues.append({
                    "type": "mismatch", "owner_id": owner.person_id, "person_id": person_id,
                    "expected": expected.value, "found": found.value,
                })
    return issues
