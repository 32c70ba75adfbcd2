"""Domain-specific exceptions for the kd-tree index.

Every error raised by this library derives from ``DomainError`` and carries a
stable ``code`` string, so callers embedding the index in a larger framework
can map them onto their own error reporting without string matching.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all library errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when input data (vectors, collections) is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "VALIDATION_ERROR")


class VectorIndexError(DomainError):
    """Base class for vector index-related errors."""


class IndexNotBuiltError(VectorIndexError):
    """Raised when querying an index whose build step has not run."""

    def __init__(self, index_name: str) -> None:
        message = f"Index '{index_name}' must be built before querying"
        super().__init__(message, "INDEX_NOT_BUILT")
        self.index_name = index_name


class DimensionMismatchError(VectorIndexError):
    """Raised when vector dimensions don't match the indexed dimensionality."""

    def __init__(self, expected: int, actual: int, context: str = "Vector") -> None:
        message = f"{context} dimension mismatch: expected {expected}, got {actual}"
        super().__init__(message, "DIMENSION_MISMATCH")
        self.expected = expected
        self.actual = actual


class UnsupportedDistanceError(VectorIndexError):
    """Raised when an index was explicitly requested for a distance it cannot serve."""

    def __init__(self, index_name: str, distance_name: str) -> None:
        message = f"Index '{index_name}' does not support distance '{distance_name}'"
        super().__init__(message, "UNSUPPORTED_DISTANCE")
        self.index_name = index_name
        self.distance_name = distance_name


class SearchError(DomainError):
    """Base class for search-related errors."""


class InvalidSearchParameterError(SearchError):
    """Raised when search parameters are invalid."""

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        message = f"Invalid search parameter '{parameter}' = {value!r}: {reason}"
        super().__init__(message, "INVALID_SEARCH_PARAMETER")
        self.parameter = parameter
        self.value = value
        self.reason = reason


class UnknownIdentifierError(SearchError):
    """Raised when a query refers to an identifier absent from the collection."""

    def __init__(self, identifier: Any) -> None:
        message = f"Identifier {identifier!r} not found in vector collection"
        super().__init__(message, "UNKNOWN_IDENTIFIER")
        self.identifier = identifier
