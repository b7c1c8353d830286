"""
AVL Tree implementation for key-ordered record storage.

Height-balanced: every insert and delete rebalances the nodes on the
descent path, so lookups stay O(log N).
"""

import logging
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass

from avlstore.interfaces.ordered_index import OrderedIndex
from avlstore.models.exceptions import DuplicateKeyError, TreeInvariantError
from avlstore.models.record import Record

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Node:
    """Node in the AVL Tree."""

    record: Record
    left: "Node | None" = None
    right: "Node | None" = None
    height: int = 1

    @property
    def key(self) -> str:
        return self.record.key


class AVLTree(OrderedIndex):
    """
    AVL Tree implementation of OrderedIndex.

    Properties maintained:
    1. In-order traversal yields keys in non-decreasing order
    2. Left and right subtree heights differ by at most one at every node
    3. Every node caches 1 + max(height(left), height(right))
    4. size() equals the number of reachable nodes

    Equal keys are sent to the right subtree on insert unless the tree was
    built with allow_duplicates=False, in which case they are rejected.
    """

    def __init__(self, allow_duplicates: bool = True) -> None:
        self._root: Node | None = None
        self._size: int = 0
        self._last_search_comparisons: int = 0
        self._allow_duplicates = allow_duplicates

    @property
    def root(self) -> Node | None:
        return self._root

    @property
    def allow_duplicates(self) -> bool:
        return self._allow_duplicates

    @property
    def last_search_comparisons(self) -> int:
        """Nodes compared during the most recent search() descent."""
        return self._last_search_comparisons

    def insert(self, record: Record) -> None:
        """Insert a record and rebalance the descent path. O(log N)"""
        if not self._allow_duplicates and self._find_node(record.key) is not None:
            raise DuplicateKeyError(record.key)

        self._root = self._insert(self._root, record)
        self._size += 1
        logger.debug(f"Inserted {record.key!r}={record.value}, size={self._size}")

    def search(self, key: str) -> Record | None:
        """Find the first record stored under key. O(log N)"""
        comparisons = 0
        current = self._root
        found = None

        while current is not None:
            comparisons += 1
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                found = current.record
                break

        self._last_search_comparisons = comparisons
        return found

    def delete(self, key: str, value: int) -> bool:
        """Remove the record matching key and value. O(log N)"""
        self._root, removed = self._delete(self._root, key, value)
        if removed is None:
            logger.debug(f"Delete of {key!r}={value} matched nothing")
            return False

        self._size -= 1
        logger.debug(f"Deleted {key!r}={value}, size={self._size}")
        return True

    def has(self, key: str) -> bool:
        return self._find_node(key) is not None

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        """Cached height of the root, 0 for an empty tree."""
        return self._height(self._root)

    def clear(self) -> int:
        """
        Detach every node, children before parents.

        Returns:
            The number of nodes released.
        """
        released = self._release(self._root)
        self._root = None
        self._size = 0
        self._last_search_comparisons = 0
        logger.debug(f"Cleared tree, released {released} nodes")
        return released

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[Record]:
        return self.iterator()

    def iterator(
        self, start: str | None = None, end: str | None = None
    ) -> Iterator[Record]:
        return _RangeIterator(self._root, start, end)

    def __aiter__(self) -> AsyncIterator[Record]:
        return self.async_iterator()

    def async_iterator(
        self, start: str | None = None, end: str | None = None
    ) -> AsyncIterator[Record]:
        return _AsyncRangeIterator(self._root, start, end)

    # Rebalancing

    def rotate_right(self, y: Node | None) -> Node | None:
        """
        Rotates the root of a subtree so that its left child is the new root
        and the old root becomes the right child.

        A node without a left child is returned unchanged.
        """
        if y is None or y.left is None:
            return y

        pivot = y.left
        y.left = pivot.right
        pivot.right = y
        self._update_height(y)
        self._update_height(pivot)
        return pivot

    def rotate_left(self, x: Node | None) -> Node | None:
        """
        Inverse of `rotate_right`.
        """
        if x is None or x.right is None:
            return x

        pivot = x.right
        x.right = pivot.left
        pivot.left = x
        self._update_height(x)
        self._update_height(pivot)
        return pivot

    def rebalance(self, node: Node | None) -> Node | None:
        """
        Refresh the cached height of node and restore the balance property
        with at most two rotations. Returns the new subtree root.
        """
        if node is None:
            return None

        self._update_height(node)
        balance = self._balance(node)

        if balance > 1 and self._balance(node.left) >= 0:
            # Left-Left
            logger.debug(f"LL rotation at {node.key!r}")
            return self.rotate_right(node)

        if balance < -1 and self._balance(node.right) <= 0:
            # Right-Right
            logger.debug(f"RR rotation at {node.key!r}")
            return self.rotate_left(node)

        if balance > 1:
            # Left-Right
            logger.debug(f"LR rotation at {node.key!r}")
            node.left = self.rotate_left(node.left)
            return self.rotate_right(node)

        if balance < -1:
            # Right-Left
            logger.debug(f"RL rotation at {node.key!r}")
            node.right = self.rotate_right(node.right)
            return self.rotate_left(node)

        return node

    def check_invariants(self) -> None:
        """
        Verify ordering, balance, cached heights and size against a full
        traversal.

        Raises:
            TreeInvariantError: On the first violation found.
        """
        count, _ = self._check_subtree(self._root, None, None)
        if count != self._size:
            raise TreeInvariantError(
                "count", None, f"size() is {self._size} but {count} nodes are reachable"
            )

    # Internals

    def _height(self, node: Node | None) -> int:
        if node is None:
            return 0
        return node.height

    def _update_height(self, node: Node) -> None:
        node.height = 1 + max(self._height(node.left), self._height(node.right))

    def _balance(self, node: Node | None) -> int:
        if node is None:
            return 0
        return self._height(node.left) - self._height(node.right)

    def _find_node(self, key: str) -> Node | None:
        """Find node by key without touching the search counter."""
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current
        return None

    def _insert(self, node: Node | None, record: Record) -> Node:
        if node is None:
            return Node(record=record)

        if record.key < node.key:
            node.left = self._insert(node.left, record)
        else:
            node.right = self._insert(node.right, record)

        return self.rebalance(node)

    def _delete(
        self, node: Node | None, key: str, value: int
    ) -> tuple[Node | None, Record | None]:
        """
        Delete key/value from the subtree rooted at node.

        Returns the new subtree root and the removed record (None on a miss).
        Every node on the path back up is rebalanced after a hit.
        """
        if node is None:
            return None, None

        if key < node.key:
            node.left, removed = self._delete(node.left, key, value)
        elif key > node.key:
            node.right, removed = self._delete(node.right, key, value)
        elif node.record.value == value:
            return self._remove(node)
        elif self._allow_duplicates:
            # Rotations can leave equal keys on either side
            node.left, removed = self._delete(node.left, key, value)
            if removed is None:
                node.right, removed = self._delete(node.right, key, value)
        else:
            return node, None

        if removed is None:
            return node, None
        return self.rebalance(node), removed

    def _remove(self, node: Node) -> tuple[Node | None, Record]:
        """Unlink node from its subtree, returning the replacement subtree."""
        removed = node.record

        if node.left is None or node.right is None:
            child = node.left if node.left is not None else node.right
            node.left = node.right = None
            return child, removed

        # Two children: adopt the in-order successor's record
        node.right, successor = self._detach_min(node.right)
        node.record = successor.record
        successor.right = None
        return self.rebalance(node), removed

    def _detach_min(self, node: Node) -> tuple[Node | None, Node]:
        """Splice the leftmost node out of a subtree."""
        if node.left is None:
            return node.right, node

        node.left, minimum = self._detach_min(node.left)
        return self.rebalance(node), minimum

    def _release(self, node: Node | None) -> int:
        if node is None:
            return 0

        released = self._release(node.left) + self._release(node.right)
        node.left = node.right = None
        return released + 1

    def _check_subtree(
        self, node: Node | None, low: str | None, high: str | None
    ) -> tuple[int, int]:
        """Return (node count, height) of a subtree, checking bounds on the way."""
        if node is None:
            return 0, 0

        key = node.key
        if self._allow_duplicates:
            out_of_order = (low is not None and key < low) or (
                high is not None and key > high
            )
        else:
            out_of_order = (low is not None and key <= low) or (
                high is not None and key >= high
            )
        if out_of_order:
            raise TreeInvariantError(
                "ordering", key, f"key outside subtree bounds ({low!r}, {high!r})"
            )

        left_count, left_height = self._check_subtree(node.left, low, key)
        right_count, right_height = self._check_subtree(node.right, key, high)

        if abs(left_height - right_height) > 1:
            raise TreeInvariantError(
                "balance", key, f"left height {left_height}, right height {right_height}"
            )

        expected = 1 + max(left_height, right_height)
        if node.height != expected:
            raise TreeInvariantError(
                "height", key, f"cached {node.height}, actual {expected}"
            )

        return left_count + right_count + 1, expected


class _RangeIterator(Iterator[Record]):
    """Iterator for key-range queries on the AVL Tree."""

    def __init__(self, root: Node | None, start: str | None, end: str | None) -> None:
        self._stack: list[Node] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        if self._end is not None and node.key >= self._end:
            self._stack.clear()
            raise StopIteration

        self._push_left_path(node.right, None)
        return node.record

    def _push_left_path(self, node: Node | None, start: str | None) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while node:
            if start is not None and node.key < start:
                node = node.right
            else:
                self._stack.append(node)
                node = node.left


class _AsyncRangeIterator(AsyncIterator[Record]):
    """Async iterator for key-range queries on the AVL Tree (in-memory, no I/O)."""

    def __init__(self, root: Node | None, start: str | None, end: str | None) -> None:
        self._inner = _RangeIterator(root, start, end)

    def __aiter__(self) -> "_AsyncRangeIterator":
        return self

    async def __anext__(self) -> Record:
        try:
            return next(self._inner)
        except StopIteration:
            raise StopAsyncIteration from None
