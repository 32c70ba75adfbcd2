"""Capacity-bounded neighbor set used during a single kNN query."""

import heapq
import math
from collections.abc import Callable, Hashable

from kdindex.domain import KNNList, Neighbor


class BoundedNeighborSet:
    """Keeps the k best ``(distance, position)`` pairs seen so far.

    Pairs compare by distance, then by collection position, so equal
    distances resolve towards the vector inserted first. Internally this is a
    max-heap (negated keys) whose top is the current worst member.

    Not thread-safe; create one per query.
    """

    __slots__ = ("_k", "_heap")

    def __init__(self, k: int) -> None:
        if k < 0:
            raise ValueError("k cannot be negative")
        self._k = k
        self._heap: list[tuple[float, int]] = []

    @property
    def k(self) -> int:
        return self._k

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def is_full(self) -> bool:
        return len(self._heap) >= self._k

    @property
    def knn_distance(self) -> float:
        """Current k-th smallest distance, +inf until k pairs are held."""
        if self._k == 0 or len(self._heap) < self._k:
            return math.inf
        return -self._heap[0][0]

    def add(self, distance: float, position: int) -> bool:
        """Offer a candidate, returns True if it was kept."""
        if self._k == 0:
            return False

        entry = (-distance, -position)
        if len(self._heap) < self._k:
            heapq.heappush(self._heap, entry)
            return True

        # Keep only if strictly better than the current worst member
        if entry > self._heap[0]:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def to_knn_list(self, identifier_at: Callable[[int], Hashable]) -> KNNList:
        """Export held pairs, closest first, translating positions to identifiers."""
        ordered = sorted((-d, -p) for d, p in self._heap)
        return KNNList(
            k=self._k,
            neighbors=tuple(
                Neighbor(identifier_at(position), distance)
                for distance, position in ordered
            ),
        )
