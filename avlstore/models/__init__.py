"""
Data models for the record store.
"""

from avlstore.models.exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    StoreError,
    TreeInvariantError,
)
from avlstore.models.record import Record

__all__ = [
    "Record",
    "StoreError",
    "RecordNotFoundError",
    "DuplicateKeyError",
    "TreeInvariantError",
]
