"""Command that builds a small tree, looks keys up and removes a few."""

from __future__ import annotations

import argparse

from .config import DEFAULT_DEGREE, InvalidDegree
from .tree import BTree

_ENTRIES = [
    (1, "one"),
    (2, "two"),
    (3, "three"),
    (4, "four"),
    (5, "five"),
    (6, "six"),
    (7, "seven"),
    (9, "nine"),
    (11, "eleven"),
    (8, "eight"),
    (10, "ten"),
]

_LOOKUPS = (5, 15)
_REMOVALS = (1, 5, 3, 8)


def _parser():
    parser = argparse.ArgumentParser(
        prog="bptree",
        description="Build a demonstration B+ tree and print it.",
    )
    parser.add_argument(
        "--degree",
        type=int,
        default=DEFAULT_DEGREE,
        help=f"degree of the tree (default {DEFAULT_DEGREE})",
    )
    return parser


def main(argv=None):
    """Run the demonstration and return the exit status."""
    parser = _parser()
    args = parser.parse_args(argv)
    try:
        tree = BTree(args.degree)
    except InvalidDegree as error:
        parser.error(str(error))

    print("Inserting values into B-tree...")
    for key, value in _ENTRIES:
        tree.set(key, value)

    print("\nB-tree structure after insertions:")
    tree.print_tree()

    print("\nTesting find operations:")
    for key in _LOOKUPS:
        value = tree.find(key)
        if value is not None:
            print(f"Key {key}: {value}")
        else:
            print(f"Key {key} not found")

    print(f"\nRemoving keys: {', '.join(str(key) for key in _REMOVALS)}")
    for key in _REMOVALS:
        tree.remove(key)

    print("\nB-tree structure after removals:")
    tree.print_tree()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())