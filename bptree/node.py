"""Nodes of a B+ tree: sorted keys, child links and a linked list of leaves."""

from __future__ import annotations

import enum
from bisect import bisect_right
from typing import Any, Optional

from .config import TreeCorrupted


class NodeType(enum.Enum):
    """The role a node plays in the tree."""

    ROOT = "root"
    INTERNAL = "internal"
    LEAF = "leaf"


class Node:
    """One node of a B+ tree.

    ``size`` is the logical key count the tree balances on. It follows
    ``len(keys)`` except after :meth:`remove_from_internal`, which lowers it
    while replacing, not dropping, a separator key.
    """

    def __init__(self, node_type=NodeType.LEAF):
        self.type: NodeType = node_type
        self.parent: Optional[Node] = None
        self.size: int = 0
        self.keys: list[int] = []
        self.children: list[Node] = []
        self.values: list[Any] = []
        self.prev: Optional[Node] = None
        self.next: Optional[Node] = None

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"Node({self.type.name}, keys={self.keys!r})"

    # --- lookups -------------------------------------------------------

    def find_key(self, key):
        """Return the position of ``key`` among the keys, or None."""
        low, high = 0, len(self.keys) - 1
        while low <= high:
            mid = (low + high) >> 1
            current = self.keys[mid]
            if current == key:
                return mid
            if current < key:
                low = mid + 1
            else:
                high = mid - 1
        return None

    def key_insert_index(self, key):
        """Return the position after every key not greater than ``key``."""
        return bisect_right(self.keys, key)

    def index_of_child(self, child):
        """Return the position of ``child`` among the children."""
        for index, candidate in enumerate(self.children):
            if candidate is child:
                return index
        raise TreeCorrupted(f"node {child!r} is not a child of {self!r}")

    # --- removal -------------------------------------------------------

    def remove_from_leaf(self, key):
        """Drop ``key`` and its value, refreshing the parent's separator."""
        index = self.find_key(key)
        if index is None:
            return
        del self.keys[index]
        del self.values[index]
        self.size -= 1

        if self.parent is not None and self.keys:
            separator = self.parent.find_key(key)
            if separator is not None:
                self.parent.keys[separator] = self.keys[0]

    def remove_from_internal(self, key):
        """Replace separator ``key`` with the smallest key beneath it."""
        index = self.find_key(key)
        if index is None:
            return
        leaf = self.children[index]
        while leaf.type is not NodeType.LEAF:
            leaf = leaf.children[0]
        self.keys[index] = leaf.keys[0]
        self.size -= 1

    # --- leaf rebalancing ----------------------------------------------

    def borrow_from_right_leaf(self):
        """Take the first entry of the next leaf."""
        sibling = self.next
        sibling_parent = sibling.parent

        self.keys.append(sibling.keys.pop(0))
        self.values.append(sibling.values.pop(0))
        self.size += 1
        sibling.size -= 1

        child_index = sibling_parent.index_of_child(sibling)
        if child_index > 0:
            sibling_parent.keys[child_index - 1] = sibling.keys[0]

    def borrow_from_left_leaf(self):
        """Take the last entry of the previous leaf."""
        sibling = self.prev
        parent = self.parent

        self.keys.insert(0, sibling.keys.pop())
        self.values.insert(0, sibling.values.pop())
        self.size += 1
        sibling.size -= 1

        parent.keys[parent.index_of_child(self) - 1] = self.keys[0]

    def merge_with_right_leaf(self):
        """Absorb the next leaf and unhook it from its parent."""
        sibling = self.next
        sibling_parent = sibling.parent

        for key, value in zip(sibling.keys[: sibling.size], sibling.values[: sibling.size]):
            self.set(key, value)

        self.next = sibling.next
        if self.next is not None:
            self.next.prev = self

        child_index = sibling_parent.index_of_child(sibling)
        del sibling_parent.keys[child_index - 1]
        del sibling_parent.children[child_index]
        sibling_parent.size -= 1

        sibling._detach()

    def merge_with_left_leaf(self):
        """Pour this leaf into the previous one and unhook this leaf."""
        sibling = self.prev
        parent = self.parent

        for key, value in zip(self.keys[: self.size], self.values[: self.size]):
            sibling.set(key, value)

        sibling.next = self.next
        if sibling.next is not None:
            sibling.next.prev = sibling

        child_index = parent.index_of_child(self)
        del parent.keys[child_index - 1]
        del parent.children[child_index]
        parent.size -= 1

        self._detach()

    # --- internal rebalancing ------------------------------------------

    def borrow_from_right_internal(self, sibling):
        """Rotate the first child of ``sibling`` through the parent into this node."""
        parent = self.parent
        child_index = parent.index_of_child(self)

        self.keys.append(parent.keys[child_index])
        parent.keys[child_index] = sibling.keys.pop(0)
        self.size += 1
        sibling.size -= 1

        moved = sibling.children.pop(0)
        self.children.append(moved)
        moved.parent = self

    def borrow_from_left_internal(self, sibling):
        """Rotate the last child of ``sibling`` through the parent into this node."""
        parent = self.parent
        child_index = parent.index_of_child(self)

        self.keys.insert(0, parent.keys[child_index - 1])
        parent.keys[child_index - 1] = sibling.keys.pop()
        self.size += 1
        sibling.size -= 1

        moved = sibling.children.pop()
        self.children.insert(0, moved)
        moved.parent = self

    def merge_with_right_internal(self, sibling):
        """Absorb ``sibling`` together with the separator between them."""
        parent = self.parent
        child_index = parent.index_of_child(self)

        self.keys.append(parent.keys.pop(child_index))
        del parent.children[child_index + 1]
        self.size += sibling.size + 1
        parent.size -= 1

        self.keys.extend(sibling.keys)
        for child in sibling.children:
            self.children.append(child)
            child.parent = self

        sibling._detach()

    def merge_with_left_internal(self, sibling):
        """Pour this node and the separator before it into ``sibling``."""
        parent = self.parent
        child_index = parent.index_of_child(self)

        sibling.keys.append(parent.keys.pop(child_index - 1))
        del parent.children[child_index]
        sibling.size += self.size + 1
        parent.size -= 1

        sibling.keys.extend(self.keys)
        for child in self.children:
            sibling.children.append(child)
            child.parent = sibling

        self._detach()

    # --- insertion and splitting ---------------------------------------

    def set(self, key, value):
        """Store ``value`` under ``key``, replacing any value already there."""
        index = self.find_key(key)
        if index is not None:
            self.values[index] = value
            return
        position = self.key_insert_index(key)
        self.keys.insert(position, key)
        self.values.insert(position, value)
        self.size += 1

    def split(self):
        """Split this node in two around its middle key.

        The middle key moves up into the parent. When there is no parent a
        new root is made and returned; otherwise None is returned.
        """
        middle = self.size >> 1
        promoted = self.keys[middle]

        if self.type is NodeType.LEAF:
            sibling = self._split_leaf(middle)
        else:
            sibling = self._split_internal(middle)

        if self.parent is not None:
            parent = self.parent
            index = parent.key_insert_index(promoted)
            parent.keys.insert(index, promoted)
            parent.size += 1
            parent.children.insert(index + 1, sibling)
            sibling.parent = parent
            return None

        root = Node(NodeType.ROOT)
        root.keys.append(promoted)
        root.size = 1
        root.children.extend((self, sibling))
        if self.type is NodeType.ROOT:
            self.type = NodeType.INTERNAL
        self.parent = root
        sibling.parent = root
        return root

    def _split_leaf(self, middle):
        sibling = Node(NodeType.LEAF)
        sibling.prev = self
        sibling.next = self.next
        self.next = sibling
        if sibling.next is not None:
            sibling.next.prev = sibling

        sibling.keys = self.keys[middle:]
        sibling.values = self.values[middle:]
        del self.keys[middle:]
        del self.values[middle:]

        sibling.size = len(sibling.keys)
        self.size = len(self.keys)
        return sibling

    def _split_internal(self, middle):
        count = self.size
        sibling = Node(NodeType.INTERNAL)

        sibling.children = self.children[middle + 1 : count + 1]
        for child in sibling.children:
            child.parent = sibling
        del self.children[middle + 1 :]

        sibling.keys = self.keys[middle + 1 : count]
        sibling.size = len(sibling.keys)
        del self.keys[middle:]

        self.size = len(self.keys)
        return sibling

    def _detach(self):
        self.keys = []
        self.children = []
        self.values = []
        self.prev = None
        self.next = None
        self.parent = None