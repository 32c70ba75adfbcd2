"""Common validation utilities for vectors and query parameters."""

from collections.abc import Sequence
from numbers import Integral
from typing import Any

import numpy as np

from kdindex.domain.errors import (
    DimensionMismatchError,
    InvalidSearchParameterError,
    ValidationError,
)


def validate_k(k: Any) -> int:
    """Validate that k is a non-negative integer."""
    if isinstance(k, bool) or not isinstance(k, Integral):
        raise InvalidSearchParameterError("k", k, "must be an integer")
    if k < 0:
        raise InvalidSearchParameterError("k", k, "cannot be negative")
    return int(k)


def validate_dimension(dimension: Any) -> int:
    """Validate that a dimensionality is a positive integer."""
    if isinstance(dimension, bool) or not isinstance(dimension, Integral):
        raise ValidationError(f"Dimension must be an integer, got {dimension!r}")
    if dimension < 1:
        raise ValidationError(f"Dimension must be >= 1, got {dimension}")
    return int(dimension)


def as_vector(values: Sequence[float] | np.ndarray, context: str = "Vector") -> np.ndarray:
    """Convert values to a finite one-dimensional float64 array."""
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{context} must contain only numbers: {e}") from e

    if vector.ndim != 1:
        raise ValidationError(
            f"{context} must be one-dimensional, got shape {vector.shape}"
        )
    if not np.all(np.isfinite(vector)):
        raise ValidationError(f"{context} contains non-finite values")
    return vector


def validate_query_vector(
    values: Sequence[float] | np.ndarray, expected_dim: int
) -> np.ndarray:
    """Convert a query vector and check it against the indexed dimensionality."""
    vector = as_vector(values, "Query vector")
    if len(vector) != expected_dim:
        raise DimensionMismatchError(expected_dim, len(vector), "Query vector")
    return vector
