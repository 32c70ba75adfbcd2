"""Static in-memory kd-tree for exact k-nearest-neighbor search under Lp norms."""

from .core import Settings, settings, setup_logging
from .domain import (
    DimensionMismatchError,
    DomainError,
    IndexNotBuiltError,
    InvalidSearchParameterError,
    KNNList,
    Neighbor,
    UnknownIdentifierError,
    UnsupportedDistanceError,
    ValidationError,
    VectorCollection,
    VectorIndexError,
)
from .indexes import (
    EuclideanDistance,
    IndexManager,
    KDTreeIndex,
    LinearScanIndex,
    LPNormDistance,
    ManhattanDistance,
    MaximumDistance,
    create_index,
    get_distance,
)

__version__ = "0.1.0"

__all__ = [
    "DimensionMismatchError",
    "DomainError",
    "EuclideanDistance",
    "IndexManager",
    "IndexNotBuiltError",
    "InvalidSearchParameterError",
    "KDTreeIndex",
    "KNNList",
    "LPNormDistance",
    "LinearScanIndex",
    "ManhattanDistance",
    "MaximumDistance",
    "Neighbor",
    "Settings",
    "UnknownIdentifierError",
    "UnsupportedDistanceError",
    "ValidationError",
    "VectorCollection",
    "VectorIndexError",
    "create_index",
    "get_distance",
    "settings",
    "setup_logging",
]
