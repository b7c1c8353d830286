"""
Custom exceptions for the record store.
"""


class StoreError(Exception):
    """Base class for all record store errors."""


class RecordNotFoundError(StoreError):
    """
    Raised by strict lookups and deletes when no matching record exists.
    """

    def __init__(self, key: str, value: int | None = None):
        """
        Initialize not-found error.

        Args:
            key: The key that was looked up.
            value: The value that had to match, if any.
        """
        self.key = key
        self.value = value
        if value is None:
            message = f"No record with key {key!r}"
        else:
            message = f"No record with key {key!r} and value {value}"
        super().__init__(message)


class DuplicateKeyError(StoreError):
    """Raised when inserting an existing key into a tree that rejects duplicates."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key {key!r} already exists")


class TreeInvariantError(StoreError):
    """
    Raised when an AVL tree invariant check fails.

    This indicates a bug in the tree engine, never bad caller input.
    """

    def __init__(self, property_name: str, key: str | None, detail: str):
        """
        Initialize invariant error.

        Args:
            property_name: Which invariant failed (ordering, balance, height, count).
            key: Key of the offending node, None for tree-wide checks.
            detail: Human readable description of the violation.
        """
        self.property_name = property_name
        self.key = key
        self.detail = detail
        where = f" at key {key!r}" if key is not None else ""
        super().__init__(f"{property_name} invariant violated{where}: {detail}")
