"""A B+ tree mapping integer keys to values."""

from __future__ import annotations

import sys
from typing import Any, Iterator, Optional

from .config import (
    DEFAULT_DEGREE,
    TREE_NODE_SYMBOL,
    TREE_PREFIX_CONT,
    TREE_PREFIX_LAST,
    InvalidDegree,
)
from .node import Node, NodeType


class BTree:
    """A B+ tree of the given degree.

    A node splits once it holds ``degree`` keys and is rebalanced once it
    holds fewer than ``degree // 2``. Values live in the leaves, which are
    chained in key order.
    """

    def __init__(self, degree=DEFAULT_DEGREE):
        if isinstance(degree, bool) or not isinstance(degree, int) or degree < 2:
            raise InvalidDegree(degree)
        self.degree = degree
        self.depth = 1
        self.root = Node(NodeType.LEAF)

    def __repr__(self):
        return f"BTree(degree={self.degree}, depth={self.depth})"

    # --- lookups -------------------------------------------------------

    def _find_leaf(self, key) -> Node:
        node = self.root
        while node.type is not NodeType.LEAF:
            node = node.children[node.key_insert_index(key)]
        return node

    def find(self, key) -> Optional[Any]:
        """Return the value stored under ``key``, or None if there is none."""
        leaf = self._find_leaf(key)
        index = leaf.find_key(key)
        if index is None:
            return None
        return leaf.values[index]

    def __contains__(self, key):
        return self._find_leaf(key).find_key(key) is not None

    def empty(self):
        """Return True when the tree holds no keys."""
        return self.root.size == 0

    # --- updates -------------------------------------------------------

    def set(self, key, value):
        """Store ``value`` under ``key``, replacing any value already there."""
        node: Optional[Node] = self._find_leaf(key)
        existed = node.find_key(key) is not None
        node.set(key, value)
        if existed:
            return

        while node is not None and node.size >= self.degree:
            new_root = node.split()
            if new_root is not None:
                self.depth += 1
                self.root = new_root
            node = node.parent

    def remove(self, key):
        """Remove ``key`` and its value; a missing key is ignored."""
        leaf = self._find_leaf(key)
        if leaf.find_key(key) is not None:
            self._remove_from(key, leaf)

    def clear(self):
        """Drop every key, leaving an empty tree of the same degree."""
        self.root = Node(NodeType.LEAF)
        self.depth = 1

    def _remove_from(self, key, node: Optional[Node]):
        minimum = self.degree >> 1
        while node is not None:
            if node.type is NodeType.LEAF:
                node.remove_from_leaf(key)
            else:
                node.remove_from_internal(key)

            if node.size < minimum:
                if node.type is NodeType.ROOT:
                    if node.size == 0 and node.children:
                        self._collapse_root(node)
                        return
                elif node.type is NodeType.INTERNAL:
                    node = self._rebalance_internal(node, minimum)
                else:
                    node = self._rebalance_leaf(node, minimum)

            node = node.parent

    def _collapse_root(self, old_root: Node):
        new_root = old_root.children[0]
        new_root.parent = None
        self.root = new_root
        self.depth -= 1
        new_root.type = NodeType.ROOT if self.depth > 1 else NodeType.LEAF

    @staticmethod
    def _rebalance_internal(node: Node, minimum: int) -> Node:
        parent = node.parent
        index = parent.index_of_child(node)
        right = parent.children[index + 1] if index + 1 < len(parent.children) else None
        left = parent.children[index - 1] if index > 0 else None

        if right is not None and right.size > minimum:
            node.borrow_from_right_internal(right)
        elif left is not None and left.size > minimum:
            node.borrow_from_left_internal(left)
        elif right is not None:
            node.merge_with_right_internal(right)
        elif left is not None:
            node.merge_with_left_internal(left)
            return left
        return node

    @staticmethod
    def _rebalance_leaf(node: Node, minimum: int) -> Node:
        parent = node.parent
        right = node.next if node.next is not None and node.next.parent is parent else None
        left = node.prev if node.prev is not None and node.prev.parent is parent else None

        if right is not None and right.size > minimum:
            node.borrow_from_right_leaf()
        elif left is not None and left.size > minimum:
            node.borrow_from_left_leaf()
        elif right is not None:
            node.merge_with_right_leaf()
        elif left is not None:
            node.merge_with_left_leaf()
            return left
        return node

    # --- drawing -------------------------------------------------------

    def _lines(self, node: Node, prefix: str, last: bool) -> Iterator[str]:
        yield f"{prefix}{TREE_NODE_SYMBOL}[{', '.join(str(key) for key in node.keys)}]"
        if node.type is NodeType.LEAF:
            return
        child_prefix = prefix + (TREE_PREFIX_LAST if last else TREE_PREFIX_CONT)
        final = len(node.children) - 1
        for position, child in enumerate(node.children):
            yield from self._lines(child, child_prefix, position == final)

    def format_tree(self):
        """Return a drawing of the tree, one node per line."""
        return "\n".join(self._lines(self.root, "", True))

    def print_tree(self, file=None):
        """Write the drawing of the tree to ``file`` (standard output by default)."""
        print(self.format_tree(), file=file if file is not None else sys.stdout)