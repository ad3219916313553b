# Rotation primitives on their own, outside of any rebalancing walk

from balanced_tree import BalancedSearchTree

def make_tree():
    return BalancedSearchTree([4, 2, 6, 1, 3, 5, 7])

def node(tree, key):
    x = tree.root
    while x.key != key:
        x = x.left if key < x.key else x.right
    return x

def test_rotate_left_at_root():
    tree = make_tree()
    n4, n6, n5, n2 = node(tree, 4), node(tree, 6), node(tree, 5), node(tree, 2)
    pivot = tree._rotate_left(n4)
    assert pivot is n6
    assert tree.root is n6
    assert n6.parent is None
    assert n6.left is n4 and n4.parent is n6
    assert n4.right is n5 and n5.parent is n4
    assert n4.left is n2
    assert (n4.height, n4.balance) == (2, 1)
    # Left transiently heavy, a rotation on its own does not rebalance
    assert (n6.height, n6.balance) == (3, 2)
    assert tree.rotation_count == 1
    assert tree.in_order() == [1, 2, 3, 4, 5, 6, 7]

    tree._rotate_right(n6)
    assert tree.level_order() == [4, 2, 6, 1, 3, 5, 7]
    assert (n4.height, n4.balance) == (2, 0)
    assert (n6.height, n6.balance) == (1, 0)
    assert tree.rotation_count == 2

def test_rotation_below_root_relinks_grandparent():
    tree = make_tree()
    n2, n1, n3, n4 = node(tree, 2), node(tree, 1), node(tree, 3), node(tree, 4)
    pivot = tree._rotate_right(n2)
    assert pivot is n1
    assert n4.left is n1 and n1.parent is n4
    assert n1.right is n2 and n2.parent is n1
    assert n2.left is None
    assert n2.right is n3 and n3.parent is n2
    # Only the two rotated nodes are recomputed
    assert (n4.height, n4.balance) == (2, 0)
    assert (n1.height, n1.balance) == (2, -2)
    assert (n2.height, n2.balance) == (1, -1)

def test_double_rotation_keeps_nodes():
    tree = BalancedSearchTree([3, 1])
    n3, n1 = tree.root, tree.root.left
    tree.insert(2)
    n2 = tree.root
    assert n2.key == 2
    assert n2.left is n1 and n1.parent is n2
    assert n2.right is n3 and n3.parent is n2
    assert n1.left is None and n1.right is None
    assert n3.left is None and n3.right is None
    assert tree.rotation_count == 2

def test_double_rotate_right_directly():
    tree = BalancedSearchTree([6, 2, 8, 1, 4, 9, 3, 5])
    n6 = node(tree, 6)
    assert tree.rotation_count == 0
    pivot = tree._double_rotate_right(n6)
    assert pivot.key == 4
    assert tree.root is pivot
    assert tree.pre_order() == [4, 2, 1, 3, 6, 5, 8, 9]
    assert tree.rotation_count == 2

def test_double_rotate_left_directly():
    tree = BalancedSearchTree([4, 2, 8, 1, 6, 9, 5, 7])
    n4 = node(tree, 4)
    assert tree.rotation_count == 0
    pivot = tree._double_rotate_left(n4)
    assert pivot.key == 6
    assert tree.root is pivot
    assert tree.pre_order() == [6, 4, 2, 1, 5, 8, 7, 9]
    assert tree.rotation_count == 2
