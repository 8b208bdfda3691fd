"""Display strings for relation kinds."""
from typing import Mapping, Optional

from .relations import Gender, RelationKind, gendered

# Formal/informal variants exist only for these.
_FORMALITY = (RelationKind.MOTHER, RelationKind.FATHER)

EN_US = {
    "family.son": "Son",
    "family.daughter": "Daughter",
    "family.grandson": "Grandson",
    "family.granddaughter": "Granddaughter",
    "family.greatgrandson": "Great Grandson",
    "family.greatgranddaughter": "Great Granddaughter",
    "family.husband": "Husband",
    "family.wife": "Wife",
    "family.uncle": "Uncle",
    "family.aunt": "Aunt",
    "family.niece": "Niece",
    "family.nephew": "Nephew",
    "family.cousin": "Cousin",
    "family.brother": "Brother",
    "family.sister": "Sister",
    "family.father": "Father",
    "family.father.formal": "Father",
    "family.father.informal": "Dad",
    "family.mother": "Mother",
    "family.mother.formal": "Mother",
    "family.mother.informal": "Mom",
    "family.grandparent": "Grandparent",
    "family.greatgrandparent": "Great Grandparent",
    "family.grandfather": "Grandfather",
    "family.grandmother": "Grandmother",
    "family.greatgrandfather": "Great Grandfather",
    "family.greatgrandmother": "Great Grandmother",
}


def _key(kind: RelationKind) -> str:
    return "family." + kind.identifier.lower().replace(" ", "")


def localization_key(kind: RelationKind, gender: Gender, informal: bool = False) -> Optional[str]:
    """Lookup key for ``kind``; None for NONE.

    Spouse and Parent are shown as the gendered variant for ``gender`` (the
    gender of the person being described). Only a stored Mother/Father gets a
    formality suffix.
    """
    if kind is RelationKind.NONE:
        return None
    if kind in _FORMALITY:
        return _key(kind) + (".informal" if informal else ".formal")
    if kind in (RelationKind.SPOUSE, RelationKind.PARENT):
        return _key(gendered(kind, gender))
    return _key(kind)


def describe(kind: RelationKind, gender: Gender, informal: bool = False,
             strings: Optional[Mapping[str, str]] = None) -> str:
    key = localization_key(kind, gender, informal)
    if key is None:
        return ""
    table = EN_US if strings is None else strings
    return table.get(key, key)
