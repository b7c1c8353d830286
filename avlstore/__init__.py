"""
AVL-tree based in-memory record store.

This package provides an ordered, indexed key/value store with:
- insert(record) - O(log N)
- search(key) - O(log N)
- delete_record(key, value) - O(log N), rebalancing every ancestor
- range_query(start, end) - Records whose integer value lies in [start, end]
- clear_database() - Drop every record
"""

from avlstore.engine.stats import StoreStats
from avlstore.engine.store import IndexedStore
from avlstore.models.exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    StoreError,
    TreeInvariantError,
)
from avlstore.models.record import Record

__all__ = [
    "IndexedStore",
    "Record",
    "StoreStats",
    "StoreError",
    "RecordNotFoundError",
    "DuplicateKeyError",
    "TreeInvariantError",
]
