from .tree import BalancedSearchTree, Node, KeyNotFoundError, DuplicateKeyError
from .validate import check_tree, InvariantViolation
from .display import render
from .util import SupportsLessThan, DuplicatePolicy, worst_case_height
