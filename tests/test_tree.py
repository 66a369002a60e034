import io
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bptree.config import InvalidDegree
from bptree.node import NodeType
from bptree.tree import BTree


def _leaf_keys(tree):
    node = tree.root
    while node.type is not NodeType.LEAF:
        node = node.children[0]
    keys = []
    while node is not None:
        keys.extend(node.keys)
        node = node.next
    return keys


def _demo_tree():
    tree = BTree(6)
    for key, value in [
        (1, "one"), (2, "two"), (3, "three"), (4, "four"), (5, "five"),
        (6, "six"), (7, "seven"), (9, "nine"), (11, "eleven"),
        (8, "eight"), (10, "ten"),
    ]:
        tree.set(key, value)
    return tree


def test_basic_operations():
    tree = BTree(4)
    assert tree.empty()
    assert tree.find(1) is None

    tree.set(5, "five")
    assert not tree.empty()
    assert tree.find(5) == "five"

    for key, value in [(3, "three"), (7, "seven"), (1, "one"), (9, "nine")]:
        tree.set(key, value)
    assert tree.find(3) == "three"
    assert tree.find(10) is None


def test_overwrite_values():
    tree = BTree(4)
    tree.set(5, "five")
    tree.set(5, "FIVE")
    assert tree.find(5) == "FIVE"


def test_deletion_operations():
    tree = BTree(4)
    for key in range(1, 11):
        tree.set(key, f"value_{key}")

    tree.remove(5)
    assert tree.find(5) is None
    assert tree.find(4) == "value_4"

    tree.remove(1)
    tree.remove(10)
    tree.remove(3)
    assert tree.find(1) is None
    assert tree.find(10) is None
    assert tree.find(3) is None
    assert tree.find(2) == "value_2"


@pytest.mark.parametrize("degree", [3, 4, 5, 6, 10, 20])
def test_different_degrees(degree):
    tree = BTree(degree)
    for key in range(1, 21):
        tree.set(key, key * key)
    assert [tree.find(key) for key in range(1, 21)] == [key * key for key in range(1, 21)]


def test_remove_from_empty_tree():
    tree = BTree(3)
    tree.remove(999)
    assert tree.empty()
    assert tree.find(999) is None


def test_duplicate_removal():
    tree = BTree(3)
    tree.set(5, "five")
    tree.remove(5)
    tree.remove(5)
    assert tree.find(5) is None
    assert tree.empty()


def test_minimum_degree():
    tree = BTree(2)
    for key in range(1, 11):
        tree.set(key, key)
    assert [tree.find(key) for key in range(1, 11)] == list(range(1, 11))


@pytest.mark.parametrize("degree", [1, 0, -3])
def test_invalid_degree(degree):
    with pytest.raises(InvalidDegree) as info:
        BTree(degree)
    assert info.value.degree == degree
    assert isinstance(info.value, ValueError)


def test_contains():
    tree = _demo_tree()
    assert 5 in tree
    assert 15 not in tree


def test_format_tree_after_insertions():
    tree = _demo_tree()
    assert tree.depth == 2
    assert tree.format_tree() == "\n".join(
        [
            "├ [4, 7]",
            "   ├ [1, 2, 3]",
            "   ├ [4, 5, 6]",
            "   ├ [7, 8, 9, 10, 11]",
        ]
    )


def test_format_tree_after_removals():
    tree = _demo_tree()
    for key in (1, 5, 3, 8):
        tree.remove(key)
    assert tree.format_tree() == "\n".join(
        [
            "├ [7]",
            "   ├ [2, 4, 6]",
            "   ├ [7, 9, 10, 11]",
        ]
    )
    assert tree.find(2) == "two"
    assert tree.find(8) is None


def test_format_empty_tree():
    assert BTree(4).format_tree() == "├ []"


def test_print_tree_writes_drawing():
    tree = _demo_tree()
    buffer = io.StringIO()
    tree.print_tree(buffer)
    assert buffer.getvalue() == tree.format_tree() + "\n"


def test_print_tree_defaults_to_stdout(capsys):
    tree = _demo_tree()
    tree.print_tree()
    assert capsys.readouterr().out == tree.format_tree() + "\n"


def test_depth_grows_with_splits():
    tree = BTree(4)
    for key in range(1, 11):
        tree.set(key, key)
    assert tree.depth == 3
    assert tree.root.type is NodeType.ROOT


def test_removal_can_shrink_depth():
    tree = BTree(4)
    for key in range(1, 11):
        tree.set(key, key)
    tree.remove(5)
    assert tree.depth == 2
    assert _leaf_keys(tree) == [1, 2, 3, 4, 6, 7, 8, 9, 10]


def test_clear_resets_tree():
    tree = _demo_tree()
    tree.clear()
    assert tree.empty()
    assert tree.depth == 1
    assert tree.find(5) is None
    tree.set(5, "again")
    assert tree.find(5) == "again"


@settings(max_examples=60, deadline=None)
@given(
    degree=st.integers(min_value=3, max_value=8),
    entries=st.lists(
        st.tuples(st.integers(min_value=-500, max_value=500), st.text(max_size=4)),
        max_size=150,
    ),
)
def test_insertions_are_all_found(degree, entries):
    tree = BTree(degree)
    expected = {}
    for key, value in entries:
        tree.set(key, value)
        expected[key] = value

    assert all(tree.find(key) == value for key, value in expected.items())
    assert _leaf_keys(tree) == sorted(expected)
    assert tree.empty() == (not expected)