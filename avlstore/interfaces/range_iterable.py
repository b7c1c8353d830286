"""
RangeIterable protocol for data structures that support key-ordered range iteration.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator

from avlstore.models.record import Record


class RangeIterable(ABC):
    """
    Protocol for data structures that support iteration over a range of keys.

    Implementations must support:
    - Full iteration via __iter__
    - Range-bounded iteration via iterator(start, end)
    - Async iteration via __aiter__
    - Async range-bounded iteration via async_iterator(start, end)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Record]:
        """Return an iterator over all records in key order."""
        pass

    @abstractmethod
    def iterator(
        self, start: str | None = None, end: str | None = None
    ) -> Iterator[Record]:
        """
        Return an iterator over records whose key lies in the specified range.

        Args:
            start: Start key (inclusive). If None, starts from the beginning.
            end: End key (exclusive). If None, iterates to the end.

        Returns:
            Iterator yielding Records in key order.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Record]:
        """Return an async iterator over all records in key order."""
        pass

    @abstractmethod
    def async_iterator(
        self, start: str | None = None, end: str | None = None
    ) -> AsyncIterator[Record]:
        """
        Return an async iterator over records whose key lies in the specified range.

        Args:
            start: Start key (inclusive). If None, starts from the beginning.
            end: End key (exclusive). If None, iterates to the end.

        Returns:
            AsyncIterator yielding Records in key order.
        """
        pass
