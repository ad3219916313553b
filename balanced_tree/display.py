from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tree import BalancedSearchTree, Node

def render(tree: BalancedSearchTree, indent: str = "  ") -> str:
    """Returns a pre-order dump of the tree, one node per line, indented by depth.
    Each line shows the side of the node under its parent, the key and the balance factor."""
    if tree.root is None:
        return "<empty>"
    lines: list[str] = []
    # Explicit stack so that degenerate shapes do not hit the recursion limit
    stack: list[tuple[Node, int, str]] = [(tree.root, 0, "*")]
    while stack:
        node, depth, side = stack.pop()
        lines.append(f"{indent * depth}{side} {node.key!r} ({node.balance:+d})")
        if node.right is not None:
            stack.append((node.right, depth + 1, "R"))
        if node.left is not None:
            stack.append((node.left, depth + 1, "L"))
    return "\n".join(lines)
