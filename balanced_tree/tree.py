from __future__ import annotations
import warnings
import weakref
from collections import deque
from typing import Generic, Iterable, Iterator
from .util import K, DuplicatePolicy, DUPLICATE_POLICIES

class KeyNotFoundError(KeyError):
    """Reports a deletion of a key that is not in the tree"""
    pass

class DuplicateKeyError(ValueError):
    """Reports an insertion of a key that is already in the tree"""
    pass

class Node(Generic[K]):
    """A tree node. Children are owned through left/right, the parent is only referenced weakly."""
    __slots__ = ("key", "left", "right", "height", "balance", "_parent", "__weakref__")

    def __init__(self, key: K, parent: Node[K] | None = None):
        self.key = key
        self.left: Node[K] | None = None
        self.right: Node[K] | None = None
        self.height = 0
        self.balance = 0
        self.parent = parent

    @property
    def parent(self) -> Node[K] | None:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Node[K] | None):
        self._parent = weakref.ref(node) if node is not None else None

    def __repr__(self):
        return f"Node({self.key!r}, balance={self.balance})"

def height(x: Node | None) -> int:
    return x.height if x is not None else -1

def update(x: Node):
    """Recomputes the height and balance factor of x from its children"""
    lh, rh = height(x.left), height(x.right)
    x.height = 1 + max(lh, rh)
    x.balance = lh - rh

class BalancedSearchTree(Generic[K]):
    """A height balanced (AVL) binary search tree.

    Keys must be totally ordered. Every node keeps a balance factor of height(left) - height(right)
    within {-1, 0, 1} between calls.

    Args:
        keys: Keys to insert one by one on construction.
        duplicates: What inserting an equal key does. "right" stores it as a distinct entry to the
            right of the existing one, "ignore" leaves the tree unchanged with a warning and "error"
            raises DuplicateKeyError.
        validate: If True, the structural invariants are checked after every mutation. Linear in
            the size of the tree, so only meant for debugging.
    """
    def __init__(self, keys: Iterable[K] | None = None, *, duplicates: DuplicatePolicy = "right", validate: bool = False):
        if duplicates not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy: {duplicates}")
        self.root: Node[K] | None = None
        self.duplicates = duplicates
        self.validate = validate
        self.rotation_count = 0
        self._size = 0
        if keys is not None:
            self.insert_all(keys)

    # Lookups
    def _find(self, key: K) -> Node[K] | None:
        node = self.root
        while node is not None and node.key != key:
            node = node.left if key < node.key else node.right
        return node

    def contains(self, key: K) -> bool:
        return self._find(key) is not None

    def __contains__(self, key: K):
        return self.contains(key)

    def contains_all(self, keys: Iterable[K]) -> bool:
        return all(self.contains(key) for key in keys)

    def size(self) -> int:
        return self._size

    def __len__(self):
        return self._size

    def empty(self):
        return self.root is None

    def height(self) -> int:
        """Height of the tree. -1 for an empty tree and 0 for a single node"""
        return height(self.root)

    @property
    def root_key(self) -> K:
        if self.root is None:
            raise ValueError("Cannot get the root key of an empty tree")
        return self.root.key

    # Insertion
    def insert(self, key: K):
        parent = None
        node = self.root
        while node is not None:
            if self.duplicates != "right" and key == node.key:
                if self.duplicates == "error":
                    raise DuplicateKeyError(f"Key {key!r} is already in the tree")
                warnings.warn(f"Key {key!r} is already in the tree. Ignoring the insert.")
                return
            parent = node
            node = node.left if key < node.key else node.right

        new = Node(key, parent)
        if parent is None:
            self.root = new
        elif key < parent.key:
            parent.left = new
        else:
            parent.right = new
        self._size += 1

        self._retrace_insert(parent)
        self._check()

    def insert_all(self, keys: Iterable[K]):
        for key in keys:
            self.insert(key)

    def _retrace_insert(self, node: Node[K] | None):
        # The subtree below node has grown by one level
        while node is not None:
            update(node)
            if node.balance == 0:
                return
            if abs(node.balance) == 1:
                node = node.parent
                continue
            # A rotation brings the subtree back to its height before the insert
            self._rebalance(node)
            return

    # Deletion
    def delete(self, key: K) -> K:
        """Removes one entry equal to key and returns the removed key.
        Raises KeyNotFoundError if there is no such entry."""
        node = self._find(key)
        if node is None:
            raise KeyNotFoundError(key)
        removed = node.key
        if node.left is not None and node.right is not None:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key = successor.key
            node = successor

        parent = node.parent
        self._unlink(node)
        self._size -= 1

        # For the two children case, parent is below the node whose key got replaced, so this walk
        # also covers the path from the successor up through the substituted node
        self._retrace_delete(parent)
        self._check()
        return removed

    def discard(self, key: K) -> K | None:
        try:
            return self.delete(key)
        except KeyNotFoundError:
            return None

    def delete_all(self, keys: Iterable[K]) -> bool:
        """Deletes every key in keys that is present. Returns True if anything was removed"""
        changed = False
        for key in keys:
            if self.discard(key) is not None:
                changed = True
        return changed

    def _unlink(self, node: Node[K]):
        # node has at most one child
        child = node.left if node.left is not None else node.right
        self._replace_child(node.parent, node, child)
        node.left = node.right = node.parent = None

    def _retrace_delete(self, node: Node[K] | None):
        # The subtree below node has lost one level
        while node is not None:
            prev_balance = node.balance
            update(node)
            if node.balance == prev_balance:
                return
            if prev_balance == 0:
                # 0 -> +-1, the height of node did not change
                return
            if node.balance == 0:
                node = node.parent
                continue

            taller = node.left if node.balance > 0 else node.right
            assert taller is not None
            stops = taller.balance == 0
            node = self._rebalance(node)
            if stops:
                return
            node = node.parent

    def clear(self):
        self.root = None
        self._size = 0

    # Rotations
    def _replace_child(self, parent: Node[K] | None, old: Node[K], new: Node[K] | None):
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new
        if new is not None:
            new.parent = parent

    def _rebalance(self, node: Node[K]) -> Node[K]:
        """Fixes a node with a balance factor of +-2. Returns the new root of its subtree"""
        if node.balance > 0:
            assert node.left is not None
            if node.left.balance < 0:
                return self._double_rotate_right(node)
            return self._rotate_right(node)
        assert node.right is not None
        if node.right.balance > 0:
            return self._double_rotate_left(node)
        return self._rotate_left(node)

    def _rotate_right(self, node: Node[K]) -> Node[K]:
        pivot = node.left
        assert pivot is not None
        inner = pivot.right
        self._replace_child(node.parent, node, pivot)
        pivot.right = node
        node.parent = pivot
        node.left = inner
        if inner is not None:
            inner.parent = node
        update(node)
        update(pivot)
        self.rotation_count += 1
        return pivot

    def _rotate_left(self, node: Node[K]) -> Node[K]:
        pivot = node.right
        assert pivot is not None
        inner = pivot.left
        self._replace_child(node.parent, node, pivot)
        pivot.left = node
        node.parent = pivot
        node.right = inner
        if inner is not None:
            inner.parent = node
        update(node)
        update(pivot)
        self.rotation_count += 1
        return pivot

    def _double_rotate_right(self, node: Node[K]) -> Node[K]:
        assert node.left is not None
        self._rotate_left(node.left)
        return self._rotate_right(node)

    def _double_rotate_left(self, node: Node[K]) -> Node[K]:
        assert node.right is not None
        self._rotate_right(node.right)
        return self._rotate_left(node)

    # Traversals
    def in_order(self) -> list[K]:
        def walk(node: Node[K] | None, out: list[K]):
            if node is not None:
                walk(node.left, out)
                out.append(node.key)
                walk(node.right, out)
        keys: list[K] = []
        walk(self.root, keys)
        return keys

    def pre_order(self) -> list[K]:
        def walk(node: Node[K] | None, out: list[K]):
            if node is not None:
                out.append(node.key)
                walk(node.left, out)
                walk(node.right, out)
        keys: list[K] = []
        walk(self.root, keys)
        return keys

    def post_order(self) -> list[K]:
        def walk(node: Node[K] | None, out: list[K]):
            if node is not None:
                walk(node.left, out)
                walk(node.right, out)
                out.append(node.key)
        keys: list[K] = []
        walk(self.root, keys)
        return keys

    def level_order(self) -> list[K]:
        keys: list[K] = []
        queue: deque[Node[K]] = deque()
        if self.root is not None:
            queue.append(self.root)
        while queue:
            node = queue.popleft()
            keys.append(node.key)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return keys

    def __iter__(self) -> Iterator[K]:
        return iter(self.in_order())

    def __repr__(self):
        return f"BalancedSearchTree({self.level_order()})"

    def _check(self):
        if self.validate:
            from .validate import check_tree
            check_tree(self)
