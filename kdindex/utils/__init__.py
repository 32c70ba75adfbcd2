"""Utility modules and helper functions.

This package contains reusable helpers shared by the collection and the indexes.
"""

from .rwlock import RWLock
from .validation import (
    as_vector,
    validate_dimension,
    validate_k,
    validate_query_vector,
)

__all__ = [
    "RWLock",
    "as_vector",
    "validate_dimension",
    "validate_k",
    "validate_query_vector",
]
