"""Relation kinds, genders, and the opposing-relation table."""
import enum


class Gender(enum.Enum):
    MALE = "Male"
    FEMALE = "Female"

    @classmethod
    def parse(cls, value: str) -> "Gender":
        """Accept 'Male'/'Female' or 'M'/'F', any case."""
        v = (value or "").strip().lower()
        if v in ("male", "m"):
            return cls.MALE
        if v in ("female", "f"):
            return cls.FEMALE
        raise ValueError(f"Unknown gender {value!r}")

    def complement(self) -> "Gender":
        return Gender.FEMALE if self is Gender.MALE else Gender.MALE


class RelationKind(enum.Enum):
    # value = canonical identifier, used for persistence and localization keys
    NONE = "None"
    SON = "Son"
    DAUGHTER = "Daughter"
    GRANDSON = "Grandson"
    GRANDDAUGHTER = "Granddaughter"
    GREATGRANDSON = "Great Grandson"
    GREATGRANDDAUGHTER = "Great Granddaughter"
    HUSBAND = "Husband"
    WIFE = "Wife"
    UNCLE = "Uncle"
    AUNT = "Aunt"
    NIECE = "Niece"
    NEPHEW = "Nephew"
    COUSIN = "Cousin"
    BROTHER = "Brother"
    SISTER = "Sister"
    FATHER = "Father"
    MOTHER = "Mother"
    SPOUSE = "Spouse"
    PARENT = "Parent"
    GRANDPARENT = "Grandparent"
    GREATGRANDPARENT = "Great Grandparent"
    GRANDFATHER = "Grandfather"
    GRANDMOTHER = "Grandmother"
    GREATGRANDFATHER = "Great Grandfather"
    GREATGRANDMOTHER = "Great Grandmother"

    @property
    def identifier(self) -> str:
        return self.value

    @property
    def is_umbrella(self) -> bool:
        return self in UMBRELLA_VARIANTS


R = RelationKind

# umbrella kind -> (variant for Male, variant for Female)
UMBRELLA_VARIANTS = {
    R.SPOUSE: (R.HUSBAND, R.WIFE),
    R.PARENT: (R.FATHER, R.MOTHER),
    R.GRANDPARENT: (R.GRANDFATHER, R.GRANDMOTHER),
    R.GREATGRANDPARENT: (R.GREATGRANDFATHER, R.GREATGRANDMOTHER),
}

# stored kind ("they are my ...") -> (owner is Male, owner is Female)
OPPOSING = {
    R.AUNT: (R.NEPHEW, R.NIECE),
    R.UNCLE: (R.NEPHEW, R.NIECE),
    R.BROTHER: (R.BROTHER, R.SISTER),
    R.SISTER: (R.BROTHER, R.SISTER),
    R.SON: (R.FATHER, R.MOTHER),
    R.DAUGHTER: (R.FATHER, R.MOTHER),
    R.FATHER: (R.SON, R.DAUGHTER),
    R.MOTHER: (R.SON, R.DAUGHTER),
    R.GRANDSON: (R.GRANDFATHER, R.GRANDMOTHER),
    R.GRANDDAUGHTER: (R.GRANDFATHER, R.GRANDMOTHER),
    R.GREATGRANDSON: (R.GREATGRANDFATHER, R.GREATGRANDMOTHER),
    R.GREATGRANDDAUGHTER: (R.GREATGRANDFATHER, R.GREATGRANDMOTHER),
    R.HUSBAND: (R.HUSBAND, R.WIFE),
    R.WIFE: (R.HUSBAND, R.WIFE),
    R.SPOUSE: (R.HUSBAND, R.WIFE),
    R.NIECE: (R.UNCLE, R.AUNT),
    R.NEPHEW: (R.UNCLE, R.AUNT),
    R.COUSIN: (R.COUSIN, R.COUSIN),
    R.GRANDPARENT: (R.GRANDSON, R.GRANDDAUGHTER),
    R.GREATGRANDPARENT: (R.GREATGRANDSON, R.GREATGRANDDAUGHTER),
    R.PARENT: (R.SON, R.DAUGHTER),
}

_BY_IDENTIFIER = {kind.value: kind for kind in RelationKind}


def _pick(pair: tuple, gender: Gender) -> RelationKind:
    return pair[0] if gender is Gender.MALE else pair[1]


def opposing_of(viewer_gender: Gender, kind: RelationKind) -> RelationKind:
    """If someone is my `kind`, return what I am to them.

    The lookup is keyed by the stored kind only; the gender that picks the
    answer is the viewer's (the tree owner's), never the other party's.
    Kinds outside the table, including NONE, give NONE.
    """
    pair = OPPOSING.get(kind)
    if pair is None:
        return RelationKind.NONE
    return _pick(pair, viewer_gender)


def parse_relation(identifier: str) -> RelationKind | None:
    """Exact, case-sensitive match on canonical identifiers. None when unknown."""
    if identifier is None:
        return None
    return _BY_IDENTIFIER.get(identifier)


def gendered(kind: RelationKind, gender: Gender) -> RelationKind:
    """Resolve an umbrella kind to its gendered variant; other kinds pass through."""
    pair = UMBRELLA_VARIANTS.get(kind)
    if pair is None:
        return kind
    return _pick(pair, gender)


def is_player_id(person_id: int) -> bool:
    # All player IDs are negative.
    return person_id < 0
