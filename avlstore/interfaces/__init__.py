"""
Abstract base classes and protocols for the record store.
"""

from avlstore.interfaces.ordered_index import OrderedIndex
from avlstore.interfaces.range_iterable import RangeIterable

__all__ = ["RangeIterable", "OrderedIndex"]
