"""
IndexedStore - Main record store API.
"""

import logging
from collections.abc import AsyncIterator, Iterable, Iterator

from avlstore.engine.stats import StoreStats
from avlstore.interfaces.range_iterable import RangeIterable
from avlstore.models.exceptions import RecordNotFoundError
from avlstore.models.record import Record
from avlstore.models.sortedcontainers import AVLTree, Node

logger = logging.getLogger(__name__)


class IndexedStore(RangeIterable):
    """
    In-memory record store indexed by an AVL tree.

    Provides:
    - insert(record): Add a record
    - search(key): Look up a record by key
    - delete_record(key, value): Remove the record matching key and value
    - range_query(start, end): Records whose value lies in [start, end]
    - clear_database(): Drop every record

    Records are ordered on their key. Range queries filter on the integer
    value, which has no relation to the tree order.
    """

    RANGE_MODES = ("inorder", "pruned")

    # Full in-order scan; "pruned" reproduces the legacy value-pruning walk
    DEFAULT_RANGE_MODE = "inorder"

    # Lenient misses return Record.not_found() / False instead of raising
    DEFAULT_STRICT = False

    # Equal keys go to the right subtree instead of being rejected
    DEFAULT_ALLOW_DUPLICATES = True

    def __init__(
        self,
        range_mode: str = DEFAULT_RANGE_MODE,
        strict: bool = DEFAULT_STRICT,
        allow_duplicates: bool = DEFAULT_ALLOW_DUPLICATES,
    ) -> None:
        """
        Initialize the store.

        Args:
            range_mode: "inorder" (full scan) or "pruned" (legacy walk that
                        prunes on value and can miss records).
            strict: Raise RecordNotFoundError on search/delete misses.
            allow_duplicates: Keep records with equal keys side by side.
                              When False, inserting an existing key raises
                              DuplicateKeyError.
        """
        if range_mode not in self.RANGE_MODES:
            raise ValueError(
                f"range_mode must be one of {self.RANGE_MODES}, got {range_mode!r}"
            )
        if not isinstance(strict, bool):
            raise ValueError(f"strict must be a bool, got {strict!r}")
        if not isinstance(allow_duplicates, bool):
            raise ValueError(f"allow_duplicates must be a bool, got {allow_duplicates!r}")

        if range_mode == "pruned":
            logger.warning(
                "range_mode='pruned' prunes on value over a key-ordered tree "
                "and can omit matching records"
            )

        self._range_mode = range_mode
        self._strict = strict
        self._index = AVLTree(allow_duplicates=allow_duplicates)

    @property
    def range_mode(self) -> str:
        return self._range_mode

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def index(self) -> AVLTree:
        return self._index

    def insert(self, record: Record) -> None:
        """
        Insert a record. The store keeps a reference to it.

        Raises:
            DuplicateKeyError: If the key exists and duplicates are rejected.
        """
        self._index.insert(record)

    def insert_many(self, records: Iterable[Record]) -> int:
        """
        Insert multiple records.

        Args:
            records: Records to insert, in order.

        Returns:
            Number of records inserted.
        """
        count = 0
        for record in records:
            self._index.insert(record)
            count += 1
        return count

    def search(self, key: str, value: int | None = None) -> Record:
        """
        Retrieve the record stored under key.

        Matching is on key only; value is accepted for call-site symmetry
        with delete_record and does not constrain the match.

        Returns:
            The stored Record, or Record.not_found() on a miss.

        Raises:
            RecordNotFoundError: On a miss when the store is strict.
        """
        record = self._index.search(key)
        if record is not None:
            return record

        if self._strict:
            raise RecordNotFoundError(key)
        return Record.not_found()

    def get(self, key: str) -> Record | None:
        """Retrieve the record stored under key, or None."""
        return self._index.search(key)

    def delete_record(self, key: str, value: int) -> bool:
        """
        Remove the record whose key and value both match.

        Returns:
            True if removed, False if nothing matched.

        Raises:
            RecordNotFoundError: On a miss when the store is strict.
        """
        if self._index.delete(key, value):
            return True

        if self._strict:
            raise RecordNotFoundError(key, value)
        return False

    def range_query(self, start: int, end: int) -> list[Record]:
        """
        Get all records whose value lies in [start, end].

        Args:
            start: Lowest value (inclusive).
            end: Highest value (inclusive).

        Returns:
            Matching records in traversal order. Empty if end < start.
        """
        result: list[Record] = []
        if end < start:
            logger.debug(f"Range query [{start}, {end}] is empty")
            return result

        if self._range_mode == "pruned":
            self._pruned_range(self._index.root, start, end, result)
        else:
            for record in self._index:
                if start <= record.value <= end:
                    result.append(record)

        logger.debug(f"Range query [{start}, {end}] matched {len(result)} records")
        return result

    def clear_database(self) -> None:
        """Release every record. The store stays usable afterwards."""
        released = self._index.clear()
        logger.debug(f"Cleared database, {released} records released")

    def get_tree_height(self) -> int:
        """Tree height recomputed by traversal, independent of cached heights."""
        return self._calculate_height(self._index.root)

    def get_search_comparisons(self, key: str, value: int | None = None) -> int:
        """
        Run a search for key and report how many nodes it compared.

        Never raises on a miss, even when the store is strict.
        """
        self._index.search(key)
        return self._index.last_search_comparisons

    def stats(self) -> StoreStats:
        return StoreStats(
            node_count=self._index.size(),
            cached_height=self._index.height(),
            computed_height=self.get_tree_height(),
            last_search_comparisons=self._index.last_search_comparisons,
        )

    def check_invariants(self) -> None:
        self._index.check_invariants()

    def __len__(self) -> int:
        return self._index.size()

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Record]:
        return self._index.__iter__()

    def iterator(
        self, start: str | None = None, end: str | None = None
    ) -> Iterator[Record]:
        return self._index.iterator(start, end)

    def __aiter__(self) -> AsyncIterator[Record]:
        return self._index.__aiter__()

    def async_iterator(
        self, start: str | None = None, end: str | None = None
    ) -> AsyncIterator[Record]:
        return self._index.async_iterator(start, end)

    def _pruned_range(
        self, node: Node | None, start: int, end: int, result: list[Record]
    ) -> None:
        if node is None:
            return

        value = node.record.value
        if value > start:
            self._pruned_range(node.left, start, end, result)

        if start <= value <= end:
            result.append(node.record)

        if value < end:
            self._pruned_range(node.right, start, end, result)

    def _calculate_height(self, node: Node | None) -> int:
        if node is None:
            return 0
        return 1 + max(
            self._calculate_height(node.left), self._calculate_height(node.right)
        )
