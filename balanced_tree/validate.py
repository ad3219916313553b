from __future__ import annotations
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .tree import BalancedSearchTree, Node

class InvariantViolation(Exception):
    """Reports a structural invariant that does not hold in a tree"""
    pass

def check_node(node: Node, *, strict: bool) -> tuple[int, int, Any, Any]:
    """Checks the subtree rooted at node. Returns (height, number of nodes, min key, max key)"""
    lh, lcount, lo, hi = -1, 0, node.key, node.key
    rh, rcount = -1, 0

    if node.left is not None:
        if node.left.parent is not node:
            raise InvariantViolation(f"Left child of {node} does not point back to it")
        lh, lcount, lo, left_max = check_node(node.left, strict=strict)
        if node.key < left_max or (strict and not left_max < node.key):
            raise InvariantViolation(f"Left subtree of {node} holds the key {left_max!r}")

    if node.right is not None:
        if node.right.parent is not node:
            raise InvariantViolation(f"Right child of {node} does not point back to it")
        rh, rcount, right_min, hi = check_node(node.right, strict=strict)
        if right_min < node.key or (strict and not node.key < right_min):
            raise InvariantViolation(f"Right subtree of {node} holds the key {right_min!r}")

    h = 1 + max(lh, rh)
    if node.height != h:
        raise InvariantViolation(f"{node} caches height {node.height} but has height {h}")
    if node.balance != lh - rh:
        raise InvariantViolation(f"{node} caches balance {node.balance} but has balance {lh - rh}")
    if abs(node.balance) > 1:
        raise InvariantViolation(f"{node} is out of balance")
    return h, 1 + lcount + rcount, lo, hi

def check_tree(tree: BalancedSearchTree):
    """Checks ordering, balance, parent links and the stored count of the tree.
    Raises InvariantViolation on the first problem found."""
    if tree.root is None:
        if len(tree) != 0:
            raise InvariantViolation(f"Empty tree reports {len(tree)} keys")
        return
    if tree.root.parent is not None:
        raise InvariantViolation(f"Root {tree.root} has a parent")
    # Equal keys are allowed to sit on either side after rotations when duplicates are stored
    _, count, _, _ = check_node(tree.root, strict=tree.duplicates != "right")
    if count != len(tree):
        raise InvariantViolation(f"Tree reports {len(tree)} keys but holds {count} nodes")
