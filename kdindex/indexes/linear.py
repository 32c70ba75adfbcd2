"""Linear scan index implementation."""

import logging
from typing import Any

import numpy as np

from .base import BaseKNNQuery, BaseVectorIndex
from .distance import DistanceFunction
from .heap import BoundedNeighborSet

logger = logging.getLogger(__name__)


class LinearScanIndex(BaseVectorIndex):
    """Linear scan index - exhaustive search baseline.

    Time: Build O(1), Query O(N*D), Space O(1) on top of the collection
    Best for: Distances the kd-tree cannot prune with, reference results
    """

    algorithm = "linear"
    name = "linear-scan"

    def _build_index(self) -> None:
        """Nothing to build, vectors are read straight from the collection."""
        logger.debug(f"Built LinearScanIndex with {self.size} vectors")

    def get_knn_query(self, distance: DistanceFunction) -> "LinearScanKNNQuery":
        """Searcher for any distance function."""
        return LinearScanKNNQuery(self, distance)

    def _stats_fields(self) -> dict[str, Any]:
        return {
            "complexity": {
                "build_time": "O(1)",
                "query_time": "O(N * D)",
                "space": "O(1)",
            },
        }


class LinearScanKNNQuery(BaseKNNQuery):
    """Exhaustive kNN search comparing the query with every vector."""

    def _search(self, query: np.ndarray, k: int) -> BoundedNeighborSet:
        neighbors = BoundedNeighborSet(k)
        for position, vector in enumerate(self._index.collection.data):
            neighbors.add(self._distance.distance(query, vector), position)
        return neighbors
