"""Read-only vector collection indexed by the kd-tree."""

import logging
from collections.abc import Hashable, Iterator, Mapping, Sequence

import numpy as np

from kdindex.domain.errors import (
    DimensionMismatchError,
    UnknownIdentifierError,
    ValidationError,
)
from kdindex.utils import as_vector, validate_dimension

logger = logging.getLogger(__name__)


class VectorCollection:
    """Immutable mapping from stable identifiers to D-dimensional vectors.

    Vectors are stored row-wise in a single read-only float64 array. Positions
    (row numbers) follow insertion order and are what the indexes permute;
    identifiers are only looked up when results are returned.

    Attributes:
        ids: Identifiers in insertion order
        data: ``(N, D)`` read-only array of coordinates
    """

    def __init__(
        self,
        vectors: Sequence[Sequence[float]] | np.ndarray,
        ids: Sequence[Hashable] | None = None,
        dimension: int | None = None,
    ) -> None:
        if dimension is not None:
            dimension = validate_dimension(dimension)

        data = self._to_matrix(vectors, dimension)
        n_vectors = data.shape[0]

        if ids is None:
            ids = range(n_vectors)
        ids = tuple(ids)
        if len(ids) != n_vectors:
            raise ValidationError(
                f"Got {len(ids)} identifiers for {n_vectors} vectors"
            )

        positions = {identifier: i for i, identifier in enumerate(ids)}
        if len(positions) != n_vectors:
            raise ValidationError("Vector identifiers must be unique")

        data.setflags(write=False)
        self._data = data
        self._ids = ids
        self._positions = positions

        logger.debug(
            f"Created VectorCollection with {n_vectors} vectors of dimension {self.dimensionality}"
        )

    @classmethod
    def from_mapping(
        cls,
        vectors: Mapping[Hashable, Sequence[float]],
        dimension: int | None = None,
    ) -> "VectorCollection":
        """Create a collection from an ``{identifier: vector}`` mapping."""
        ids = list(vectors.keys())
        return cls([vectors[identifier] for identifier in ids], ids, dimension)

    @staticmethod
    def _to_matrix(
        vectors: Sequence[Sequence[float]] | np.ndarray, dimension: int | None
    ) -> np.ndarray:
        """Validate vectors and stack them into an ``(N, D)`` float64 array."""
        if len(vectors) == 0:
            if dimension is None:
                raise ValidationError(
                    "Dimension must be given explicitly for an empty collection"
                )
            return np.empty((0, dimension), dtype=np.float64)

        rows = []
        first_dim = dimension
        for i, vector in enumerate(vectors):
            row = as_vector(vector, f"Vector at index {i}")
            if first_dim is None:
                first_dim = len(row)
                if first_dim == 0:
                    raise ValidationError("Vectors must have at least one dimension")
            elif len(row) != first_dim:
                raise DimensionMismatchError(first_dim, len(row), f"Vector at index {i}")
            rows.append(row)

        return np.vstack(rows)

    @property
    def dimensionality(self) -> int:
        """Number of coordinates per vector."""
        return self._data.shape[1]

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def ids(self) -> tuple[Hashable, ...]:
        return self._ids

    def __len__(self) -> int:
        return self._data.shape[0]

    def __contains__(self, identifier: object) -> bool:
        try:
            return identifier in self._positions
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._ids)

    def position_of(self, identifier: Hashable) -> int:
        """Row position of an identifier."""
        try:
            return self._positions[identifier]
        except (KeyError, TypeError):
            raise UnknownIdentifierError(identifier) from None

    def identifier_at(self, position: int) -> Hashable:
        return self._ids[position]

    def vector_at(self, position: int) -> np.ndarray:
        return self._data[position]

    def get(self, identifier: Hashable) -> np.ndarray:
        """Vector stored under an identifier (read-only view)."""
        return self._data[self.position_of(identifier)]
