"""
Shared pytest fixtures for record store tests.
"""

import pytest

from avlstore.engine.store import IndexedStore
from avlstore.models.record import Record
from avlstore.models.sortedcontainers import AVLTree


@pytest.fixture
def tree():
    """Provide a fresh AVLTree instance."""
    return AVLTree()


@pytest.fixture
def store():
    """Provide a lenient IndexedStore with default settings."""
    return IndexedStore()


@pytest.fixture
def strict_store():
    """Provide an IndexedStore that raises on misses."""
    return IndexedStore(strict=True)


@pytest.fixture
def sample_records():
    """Provide the seven-record tree used by the deletion scenarios."""
    return [
        Record("m", 10),
        Record("f", 5),
        Record("t", 20),
        Record("c", 3),
        Record("h", 8),
        Record("p", 15),
        Record("z", 25),
    ]


@pytest.fixture
def large_sample_records():
    """Provide larger sample for stress testing."""
    return [Record(f"key{i:04d}", i) for i in range(1000)]
