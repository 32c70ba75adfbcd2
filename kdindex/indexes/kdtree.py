"""KD-Tree vector index implementation.

The tree is never materialized as nodes. After ``build`` a single array of
collection positions is ordered so that every range ``[left, right)`` visited
by the recursion is a node: its split element sits at
``middle = (left + right) // 2`` and its split axis is ``depth % D``. All
elements of ``[left, middle)`` have an axis coordinate ``<=`` the split
element's, all elements of ``(middle, right)`` have one ``>=``. Where equal
coordinates end up is implementation-defined.

Reference: J. L. Bentley, "Multidimensional binary search trees used for
associative searching", Communications of the ACM 18(9), 1975.
"""

import logging
from collections.abc import Iterator
from typing import Any, Literal

import numpy as np

from kdindex.core.config import settings
from kdindex.domain import VectorCollection

from .base import BaseKNNQuery, BaseVectorIndex
from .distance import DistanceFunction, LPNormDistance, is_lp_norm
from .heap import BoundedNeighborSet

logger = logging.getLogger(__name__)

PartitionStrategy = Literal["select", "sort"]


class KDTreeIndex(BaseVectorIndex):
    """Static in-memory KD-Tree for exact kNN under Lp norms.

    Time: Build O(N log N) with selection, O(N log^2 N) with sorting;
    Query O(log N) avg/O(N) worst; Space O(N) on top of the collection.
    Best for: Low dimensions, exact results, data that does not change.
    """

    algorithm = "kdtree"
    name = "kd-tree"

    def __init__(
        self,
        collection: VectorCollection,
        partition: PartitionStrategy | None = None,
    ) -> None:
        """Initialize KD-Tree index."""
        super().__init__(collection)
        if partition is None:
            partition = settings.kdtree_partition
        if partition not in ("select", "sort"):
            raise ValueError("partition must be 'select' or 'sort'")

        self._partition: PartitionStrategy = partition
        self._sorted: np.ndarray = np.arange(len(collection), dtype=np.intp)

        logger.debug(f"Initialized KDTreeIndex with partition={partition}")

    @property
    def sorted_positions(self) -> np.ndarray:
        """The identifier array that encodes the tree (read-only view)."""
        view = self._sorted.view()
        view.setflags(write=False)
        return view

    def _build_index(self) -> None:
        """Reorder the position array so every implicit node is partitioned."""
        self._sorted = np.arange(self.size, dtype=np.intp)
        if self.size > 1:
            self._build_tree(0, self.size, 0)

        logger.debug(f"Built KDTree with {self.size} vectors")

    def _build_tree(self, left: int, right: int, axis: int) -> None:
        """Recursively partition ``[left, right)`` on ``axis``."""
        middle = (left + right) // 2
        segment = self._sorted[left:right]
        keys = self._collection.data[segment, axis]

        if self._partition == "select":
            order = np.argpartition(keys, middle - left)
        else:
            order = np.argsort(keys, kind="stable")
        self._sorted[left:right] = segment[order]

        next_axis = (axis + 1) % self.dim
        if left < middle:
            self._build_tree(left, middle, next_axis)
        if middle + 1 < right:
            self._build_tree(middle + 1, right, next_axis)

    def iter_nodes(self) -> Iterator[tuple[int, int, int, int, int]]:
        """Yield every implicit node as ``(left, middle, right, axis, depth)``."""
        if self.size == 0:
            return

        stack = [(0, self.size, 0)]
        while stack:
            left, right, depth = stack.pop()
            middle = (left + right) // 2
            yield left, middle, right, depth % self.dim, depth

            if middle + 1 < right:
                stack.append((middle + 1, right, depth + 1))
            if left < middle:
                stack.append((left, middle, depth + 1))

    def get_tree_depth(self) -> int:
        """Number of levels of the implicit tree."""
        return max((depth + 1 for *_, depth in self.iter_nodes()), default=0)

    def get_knn_query(self, distance: DistanceFunction) -> "KDTreeKNNQuery | None":
        """Searcher for an Lp norm, None for any other distance."""
        if not is_lp_norm(distance):
            logger.debug(
                f"KDTreeIndex cannot serve distance '{distance.name}': not an Lp norm"
            )
            return None
        return KDTreeKNNQuery(self, distance)

    def _structure_bytes(self) -> int:
        return int(self._sorted.nbytes)

    def _stats_fields(self) -> dict[str, Any]:
        return {
            "tree_depth": self.get_tree_depth() if self.is_built else 0,
            "partition": self._partition,
            "complexity": {
                "build_time": (
                    "O(N log N)" if self._partition == "select" else "O(N log^2 N)"
                ),
                "query_time": "O(log N) average, O(N) worst case",
                "space": "O(N)",
            },
        }


class KDTreeKNNQuery(BaseKNNQuery):
    """Branch-and-bound kNN search over a built ``KDTreeIndex``.

    Holds no per-query state, so one instance may serve concurrent queries.
    """

    def __init__(self, index: KDTreeIndex, distance: LPNormDistance) -> None:
        super().__init__(index, distance)
        self._tree = index

    def _search(self, query: np.ndarray, k: int) -> BoundedNeighborSet:
        neighbors = BoundedNeighborSet(k)
        self._kdsearch(0, self._tree.size, 0, query, neighbors, np.inf)
        return neighbors

    def _kdsearch(
        self,
        left: int,
        right: int,
        axis: int,
        query: np.ndarray,
        neighbors: BoundedNeighborSet,
        max_dist: float,
    ) -> float:
        """Search the node ``[left, right)``, returning the updated k-th distance."""
        middle = (left + right) // 2
        position = int(self._tree._sorted[middle])
        split = self._tree.collection.data[position]

        delta = split[axis] - query[axis]
        on_left = delta >= 0
        on_right = delta <= 0
        next_axis = (axis + 1) % self._tree.dim

        # Query lies on the splitting plane: nothing can be pruned here.
        if on_left and on_right:
            max_dist = self._consider(query, split, position, neighbors, max_dist)
            if left < middle:
                max_dist = self._kdsearch(
                    left, middle, next_axis, query, neighbors, max_dist
                )
            if middle + 1 < right:
                max_dist = self._kdsearch(
                    middle + 1, right, next_axis, query, neighbors, max_dist
                )
            return max_dist

        # Near side first, then the split element and far side while the
        # k-th distance still reaches across the plane.
        if on_left:
            near = (left, middle)
            far = (middle + 1, right)
        else:
            near = (middle + 1, right)
            far = (left, middle)

        if near[0] < near[1]:
            max_dist = self._kdsearch(
                near[0], near[1], next_axis, query, neighbors, max_dist
            )
        gap = self._distance.axis_gap(delta)
        if gap <= max_dist:
            max_dist = self._consider(query, split, position, neighbors, max_dist)
        if far[0] < far[1] and gap <= max_dist:
            max_dist = self._kdsearch(
                far[0], far[1], next_axis, query, neighbors, max_dist
            )
        return max_dist

    def _consider(
        self,
        query: np.ndarray,
        vector: np.ndarray,
        position: int,
        neighbors: BoundedNeighborSet,
        max_dist: float,
    ) -> float:
        """Offer a split element to the neighbor set and return the new bound."""
        dist = self._distance.distance(query, vector)
        if dist <= max_dist:
            neighbors.add(dist, position)
            return neighbors.knn_distance
        return max_dist
