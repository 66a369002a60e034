"""Tree defaults, drawing symbols and the exceptions raised by the tree."""

DEFAULT_DEGREE = 6

TREE_PREFIX_LAST = "   "
TREE_PREFIX_CONT = "╎  "
TREE_NODE_SYMBOL = "├ "


class BTreeError(Exception):
    """Base class of every error raised by the tree."""


class InvalidDegree(BTreeError, ValueError):
    """Raised when a tree is asked for a degree it cannot have."""

    def __init__(self, degree):
        self.degree = degree
        super().__init__(f"Invalid B-tree degree: {degree}")


class KeyNotFound(BTreeError, KeyError):
    """Raised when a key that must be present is missing."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Key not found: {key}")

    def __str__(self):
        return self.args[0]


class TreeCorrupted(BTreeError, RuntimeError):
    """Raised when the links between nodes are not what they must be."""

    def __init__(self, message):
        self.detail = message
        super().__init__(f"Tree corruption detected: {message}")