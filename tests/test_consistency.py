"""Tests for kinship/consistency.py — reciprocity across loaded trees."""
from kinship.consistency import check_reciprocity
from kinship.relations import Gender, RelationKind as R
from kinship.world import Person


def _pair(a_gender=Gender.FEMALE, b_gender=Gender.MALE):
    return Person(1, "A", a_gender), Person(2, "B", b_gender)


def test_consistent():
    a, b = _pair()
    a.family_tree.add(2, R.SON)
    b.family_tree.add(1, R.MOTHER)
    assert check_reciprocity([a, b]) == []


def test_missing():
    a, b = _pair()
    a.family_tree.add(2, R.SON)
    issues = check_reciprocity([a, b])
    assert issues == [{
        "type": "missing", "owner_id": 1, "person_id": 2,
        "expected": "Mother", "found": None,
    }]


def test_mismatch():
    a, b = _pair()
    a.family_tree.add(2, R.SON)
    b.family_tree.add(1, R.AUNT)
    issues = check_reciprocity([a, b])
    assert len(issues) == 2
    assert {i["type"] for i in issues} == {"mismatch"}
    first = [i for i in issues if i["owner_id"] == 1][0]
    assert first["expected"] == "Mother"
    assert first["found"] == "Aunt"


def test_umbrella_accepted():
    a, b = _pair(Gender.MALE, Gender.FEMALE)
    a.family_tree.add(2, R.WIFE)
    b.family_tree.add(1, R.SPOUSE)
    # b -> a: Spouse resolves to Husband for a; a -> b: Wife is what b expects
    assert check_reciprocity([a, b]) == []


def test_unloaded_persons_skipped():
    a, _ = _pair()
    a.family_tree.add(99, R.COUSIN)
    assert check_reciprocity([a]) == []


def test_does_not_mutate():
    a, b = _pair()
    a.family_tree.add(2, R.SON)
    check_reciprocity([a, b])
    assert len(b.family_tree) == 0
