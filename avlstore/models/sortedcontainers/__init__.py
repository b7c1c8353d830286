"""
Ordered index implementations for the record store.
"""

from avlstore.models.sortedcontainers.avl_tree import AVLTree, Node

__all__ = ["AVLTree", "Node"]
