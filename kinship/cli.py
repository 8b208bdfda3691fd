from __future__ import annotations

import argparse
import logging

import kuzu

from kinship.db import get_database
from kinship import store
from kinship.consistency import check_reciprocity


def dump(conn: kuzu.Connection, person_id: int) -> int:
    person = store.load_person(conn, person_id)
    if person is None:
        print(f"Person {person_id} not found")
        return 1
    person.family_tree.dump()
    for other_id, kind in person.family_tree.items():
        print(f"{other_id} : {kind.value}")
    return 0


def check(conn: kuzu.Connection) -> int:
    issues = check_reciprocity(store.load_world(conn).persons())
    for issue in issues:
        print(
            f"{issue['type']}: {issue['owner_id']} -> {issue['person_id']} "
            f"expected {issue['expected']!r}, found {issue['found']!r}"
        )
    print(f"{len(issues)} reciprocity issue(s)")
    return 1 if issues else 0


def main(argv: list[str] | None = None, conn: kuzu.Connection | None = None) -> int:
    parser = argparse.ArgumentParser(prog="kinship")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    sub = parser.add_subparsers(dest="command", required=True)
    p_dump = sub.add_parser("dump", help="Print a stored family tree")
    p_dump.add_argument("person_id", type=int)
    sub.add_parser("check", help="Report non-reciprocal entries across stored trees")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    if conn is None:
        conn = kuzu.Connection(get_database())

    if args.command == "dump":
        return dump(conn, args.person_id)
    return check(conn)


if __name__ == "__main__":
    raise SystemExit(main())
