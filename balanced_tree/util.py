from __future__ import annotations
import math
from typing import Any, Literal, Protocol, TypeVar

class SupportsLessThan(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...

K = TypeVar('K', bound=SupportsLessThan)

# What an insert does with a key that compares equal to one already stored
DuplicatePolicy = Literal["right", "ignore", "error"]
DUPLICATE_POLICIES: tuple[str, ...] = ("right", "ignore", "error")

def worst_case_height(n: int) -> float:
    """Upper bound on the height of an AVL tree holding n keys"""
    return 1.44 * math.log2(n + 2) - 0.328
