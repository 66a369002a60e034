# bptree

An in-memory B+ tree that maps integer keys to values of any type.

All values live in the leaves. Each leaf is linked to its neighbours in key
order, and the internal nodes hold only separator keys. A node splits when
it reaches the tree's degree. When a removal leaves a node with fewer than
`degree // 2` keys, the node borrows a key from a sibling or merges with
that sibling.

## Installation

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from bptree.tree import BTree

tree = BTree(6)            # the default degree is 6, so BTree() gives the same tree

for key, word in enumerate(["one", "two", "three", "four", "five"], start=1):
    tree.set(key, word)

tree.find(3)       # "three"
tree.find(15)      # None
5 in tree          # True

tree.set(5, "FIVE")   # replaces the value of a key that already exists
tree.remove(1)
tree.remove(42)       # does nothing, because the key is missing

print(tree.format_tree())
tree.print_tree()     # writes the same drawing to standard output, or to file=...
tree.empty()          # False
tree.clear()          # removes every key; the degree stays the same
```

The tree also has the attributes `degree`, `depth` (the number of levels)
and `root`.

`format_tree()` draws the tree with one line per node. Each child is
indented below its parent. The following tree has degree 3 and holds the
keys 1 to 5:

```
├ [3]
   ├ [2]
   ╎  ├ [1]
   ╎  ├ [2]
   ├ [4]
      ├ [3]
      ├ [4, 5]
```

### Errors

The exceptions are defined in `bptree.config`. They all derive from
`BTreeError`:

- `InvalidDegree` (also a `ValueError`): `BTree` raises it when the degree
  is not an integer of at least 2.
- `TreeCorrupted` (also a `RuntimeError`): raised when a node is not found
  among its parent's children.
- `KeyNotFound` (also a `KeyError`): it is defined for callers to use. The
  tree does not raise it, because `find` returns `None` for a missing key.

The `bptree.config` module also defines `DEFAULT_DEGREE` and the symbols
used to draw the tree. The node class and its operations are in
`bptree.node` (`Node` and `NodeType`). Use them to inspect the structure
or to change it directly.

## Demo

```
bptree-demo
bptree-demo --degree 4
```

The demo builds a tree of the given degree (6 by default) and inserts the
keys 1 to 11. It prints the tree and looks up the keys 5 and 15. It then
removes the keys 1, 5, 3 and 8 and prints the tree again.

## What it does not do

The tree lives only in memory. It has no way to save itself to a file or
to load itself from one. Keys are integers. The public interface offers
single-key operations only: there is no iteration over the entries and
no range query.