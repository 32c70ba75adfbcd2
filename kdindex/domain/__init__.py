"""Domain layer: the indexed vector collection, query results and errors."""

from .errors import (
    DimensionMismatchError,
    DomainError,
    IndexNotBuiltError,
    InvalidSearchParameterError,
    SearchError,
    UnknownIdentifierError,
    UnsupportedDistanceError,
    ValidationError,
    VectorIndexError,
)
from .collection import VectorCollection
from .results import KNNList, Neighbor

__all__ = [
    "DimensionMismatchError",
    "DomainError",
    "IndexNotBuiltError",
    "InvalidSearchParameterError",
    "KNNList",
    "Neighbor",
    "SearchError",
    "UnknownIdentifierError",
    "UnsupportedDistanceError",
    "ValidationError",
    "VectorCollection",
    "VectorIndexError",
]
