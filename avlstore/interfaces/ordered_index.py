"""
OrderedIndex abstract base class for key-ordered record trees.
"""

from abc import abstractmethod

from avlstore.interfaces.range_iterable import RangeIterable
from avlstore.models.record import Record


class OrderedIndex(RangeIterable):
    """
    Abstract base class for record indexes ordered on the record key.

    Provides O(log N) operations for insert, search, and delete.
    Inherits key-range iteration capabilities from RangeIterable.

    Implementations:
    - AVLTree: height-balanced, rebalances on every insert and delete
    """

    @abstractmethod
    def insert(self, record: Record) -> None:
        """
        Insert a record.

        Args:
            record: The record to store. The index keeps a reference to it.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def search(self, key: str) -> Record | None:
        """
        Find the record stored under a key.

        Args:
            key: The key to look up.

        Returns:
            The first Record found with that key, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, key: str, value: int) -> bool:
        """
        Remove the record matching both key and value.

        Args:
            key: The key of the record to remove.
            value: The value the stored record must carry.

        Returns:
            True if a record was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, key: str) -> bool:
        """
        Check if a key exists.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored records.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """
        Drop every record held by the index.

        Returns:
            The number of records released.
        """
        pass
