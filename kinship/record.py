"""Flat key/value encoding of a family tree.

Layout: for i = 0, 1, 2, ... a pair of fields ``entryID{i}`` (int) and
``entryRelation{i}`` (canonical relation string). There is no count field.
Reading stops at the first index whose pair is absent, or whose id is 0 and
relation is "" (the end marker a zero-defaulting host format produces for
missing fields). Id 0 and the empty identifier are therefore never valid
stored values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, MutableMapping

from pydantic import ValidationError

from .relations import RelationKind
from .schemas import TreeEntry

END_MARKER = "end_marker"
MISSING_FIELD = "missing_field"

# Older saves prefixed both fields with "familyTree".
LEGACY_PREFIX = "familyTree"


def field_names(index: int, prefix: str = "") -> tuple[str, str]:
    if prefix:
        return f"{prefix}EntryID{index}", f"{prefix}EntryRelation{index}"
    return f"entryID{index}", f"entryRelation{index}"


@dataclass
class DecodeResult:
    entries: int = 0
    errors: list[dict] = field(default_factory=list)
    terminated_by: str = MISSING_FIELD

    @property
    def ok(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict:
        return {"entries": self.entries, "errors": list(self.errors),
                "terminated_by": self.terminated_by}


def write_entries(items: Iterable[tuple[int, RelationKind]],
                  record: MutableMapping[str, Any] | None = None,
                  prefix: str = "") -> MutableMapping[str, Any]:
    """Write pairs densely from index 0 and drop stale pairs beyond the end."""
    if record is None:
        record = {}
    count = 0
    for person_id, kind in items:
        id_key, rel_key = field_names(count, prefix)
        record[id_key] = person_id
        record[rel_key] = kind.identifier
        count += 1

    while True:
        id_key, rel_key = field_names(count, prefix)
        if id_key not in record and rel_key not in record:
            break
        record.pop(id_key, None)
        record.pop(rel_key, None)
        count += 1
    return record


def _describe_error(index: int, exc: ValidationError) -> dict:
    err = exc.errors()[0]
    loc = err["loc"][0] if err.get("loc") else ""
    return {
        "index": index,
        "type": "malformed_id" if loc == "person_id" else "unknown_relation",
        "message": f"Entry {index}: {err['msg']}",
    }


def read_entries(record: Mapping[str, Any],
                 prefix: str = "") -> tuple[list[TreeEntry], DecodeResult]:
    """Decode pairs until the end marker or a missing field.

    Malformed pairs are reported in the result and skipped; reading carries
    on with the next index so one bad pair does not hide the rest.
    """
    result = DecodeResult()
    entries: list[TreeEntry] = []
    index = 0
    while True:
        id_key, rel_key = field_names(index, prefix)
        has_id, has_rel = id_key in record, rel_key in record
        if not has_id and not has_rel:
            result.terminated_by = MISSING_FIELD
            break
        if has_id != has_rel:
            missing = rel_key if has_id else id_key
            result.errors.append({
                "index": index, "type": "incomplete_entry",
                "message": f"Entry {index}: field {missing!r} is missing",
            })
            result.terminated_by = MISSING_FIELD
            break

        raw_id, raw_rel = record[id_key], record[rel_key]
        if raw_id == 0 and raw_rel == "":
            result.terminated_by = END_MARKER
            break

        try:
            entries.append(TreeEntry(person_id=raw_id, relation=raw_rel))
        except ValidationError as e:
            result.errors.append(_describe_error(index, e))
        index += 1

    result.entries = len(entries)
    return entries, result
