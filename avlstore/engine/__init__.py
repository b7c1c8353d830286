"""
Record store engine.
"""

from avlstore.engine.stats import StoreStats
from avlstore.engine.store import IndexedStore

__all__ = ["IndexedStore", "StoreStats"]
