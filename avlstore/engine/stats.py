"""
StoreStats - point-in-time instrumentation snapshot.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreStats:
    """
    Counters exposed by an IndexedStore.

    Attributes:
        node_count: Records currently held by the tree.
        cached_height: Height stored on the root node.
        computed_height: Height recomputed by a full traversal.
        last_search_comparisons: Nodes compared by the most recent search.
    """

    node_count: int
    cached_height: int
    computed_height: int
    last_search_comparisons: int

    @property
    def heights_agree(self) -> bool:
        return self.cached_height == self.computed_height
