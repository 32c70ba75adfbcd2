"""Indexes for exact k-nearest-neighbor search.

Available Algorithms:
- KDTreeIndex: Static implicit kd-tree, exact kNN for Lp norms
- LinearScanIndex: Exhaustive baseline for any distance function
"""

from .base import BaseKNNQuery, BaseVectorIndex, KNNQuery, VectorIndex
from .distance import (
    CosineDistance,
    DistanceFunction,
    EuclideanDistance,
    LPNormDistance,
    ManhattanDistance,
    MaximumDistance,
    get_distance,
    is_lp_norm,
)
from .heap import BoundedNeighborSet
from .kdtree import KDTreeIndex, KDTreeKNNQuery
from .linear import LinearScanIndex, LinearScanKNNQuery
from .manager import (
    IndexManager,
    ThreadSafeKNNQuery,
    create_index,
    recommend_index_type,
)

__all__ = [
    "BaseKNNQuery",
    "BaseVectorIndex",
    "BoundedNeighborSet",
    "CosineDistance",
    "DistanceFunction",
    "EuclideanDistance",
    "IndexManager",
    "KDTreeIndex",
    "KDTreeKNNQuery",
    "KNNQuery",
    "LPNormDistance",
    "LinearScanIndex",
    "LinearScanKNNQuery",
    "ManhattanDistance",
    "MaximumDistance",
    "ThreadSafeKNNQuery",
    "VectorIndex",
    "create_index",
    "get_distance",
    "is_lp_norm",
    "recommend_index_type",
]
