"""Base protocol and interfaces for kNN indexes over a vector collection."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Hashable, Sequence
from time import perf_counter
from typing import Any, Protocol, runtime_checkable

import numpy as np

from kdindex.core.config import settings
from kdindex.core.logging import log_query_info
from kdindex.domain import IndexNotBuiltError, KNNList, VectorCollection
from kdindex.schemas import IndexStats, MemoryUsage
from kdindex.utils import validate_k, validate_query_vector

from .distance import DistanceFunction
from .heap import BoundedNeighborSet

logger = logging.getLogger(__name__)


@runtime_checkable
class KNNQuery(Protocol):
    """Protocol for kNN searchers bound to one index and one distance."""

    @property
    def distance(self) -> DistanceFunction:
        """Distance function used to rank neighbors."""
        ...

    def get_knn_for_object(
        self, query: Sequence[float] | np.ndarray, k: int
    ) -> KNNList:
        """Find the k nearest neighbors of a query vector."""
        ...

    def get_knn_for_id(self, identifier: Hashable, k: int) -> KNNList:
        """Find the k nearest neighbors of a stored vector."""
        ...


@runtime_checkable
class VectorIndex(Protocol):
    """Protocol for static kNN index implementations."""

    @property
    def dim(self) -> int:
        """Vector dimension."""
        ...

    @property
    def size(self) -> int:
        """Number of indexed vectors."""
        ...

    @property
    def is_built(self) -> bool:
        """True if index is built and ready for queries."""
        ...

    def build(self) -> None:
        """Build the index over its collection."""
        ...

    def get_knn_query(self, distance: DistanceFunction) -> KNNQuery | None:
        """Searcher for the distance, or None if the index cannot serve it."""
        ...


class BaseVectorIndex(ABC):
    """Base class with common functionality for index implementations."""

    algorithm: str = ""
    name: str = ""

    def __init__(self, collection: VectorCollection) -> None:
        self._collection = collection
        self._is_built = False
        self._build_duration: float | None = None

        logger.debug(
            f"Initialized {self.__class__.__name__} over {len(collection)} vectors "
            f"with dim={collection.dimensionality}"
        )

    @property
    def collection(self) -> VectorCollection:
        return self._collection

    @property
    def dim(self) -> int:
        """Get the dimension of vectors in this index."""
        return self._collection.dimensionality

    @property
    def size(self) -> int:
        """Get the number of indexed vectors."""
        return len(self._collection)

    @property
    def is_built(self) -> bool:
        """Check if the index has been built and is ready for queries."""
        return self._is_built

    def build(self) -> None:
        """Build the index over the collection."""
        logger.info(
            f"Building {self.__class__.__name__} with {self.size} vectors of dimension {self.dim}"
        )

        start_time = perf_counter()
        self._build_index()
        self._build_duration = perf_counter() - start_time
        self._is_built = True

        logger.info(
            f"Successfully built {self.__class__.__name__} in {self._build_duration:.3f}s"
        )

    @abstractmethod
    def _build_index(self) -> None:
        """Build concrete index structure."""
        pass

    @abstractmethod
    def get_knn_query(self, distance: DistanceFunction) -> "BaseKNNQuery | None":
        """Searcher for the distance, or None if unsupported."""
        pass

    def get_memory_usage(self) -> MemoryUsage:
        """Memory usage estimate in bytes."""
        vectors = int(self._collection.data.nbytes)
        structure = self._structure_bytes()
        return MemoryUsage(vectors=vectors, structure=structure, total=vectors + structure)

    def _structure_bytes(self) -> int:
        return 0

    def _stats_fields(self) -> dict[str, Any]:
        """Algorithm-specific statistics fields."""
        return {}

    def get_stats(self) -> IndexStats:
        """Comprehensive index statistics."""
        return IndexStats(
            algorithm=self.algorithm,
            name=self.name,
            dimension=self.dim,
            total_vectors=self.size,
            is_built=self.is_built,
            build_duration=self._build_duration,
            memory_usage_bytes=self.get_memory_usage(),
            **self._stats_fields(),
        )


class BaseKNNQuery(ABC):
    """Shared validation, by-identifier and bulk lookups for kNN searchers.

    Subclasses implement ``_search``, which fills a ``BoundedNeighborSet``
    for an already validated query with ``k >= 1`` over a non-empty index.
    """

    def __init__(self, index: BaseVectorIndex, distance: DistanceFunction) -> None:
        self._index = index
        self._distance = distance

    @property
    def index(self) -> BaseVectorIndex:
        return self._index

    @property
    def distance(self) -> DistanceFunction:
        return self._distance

    def get_knn_for_object(
        self, query: Sequence[float] | np.ndarray, k: int
    ) -> KNNList:
        """Find the k nearest neighbors of a query vector.

        Returns at most ``min(k, N)`` neighbors sorted by ascending distance;
        equal distances keep collection insertion order.
        """
        if not self._index.is_built:
            raise IndexNotBuiltError(self._index.name)

        query_vector = validate_query_vector(query, self._index.dim)
        k = validate_k(k)

        start_time = perf_counter()
        if k == 0 or self._index.size == 0:
            result = KNNList(k=k)
        else:
            neighbors = self._search(query_vector, k)
            result = neighbors.to_knn_list(self._index.collection.identifier_at)

        if settings.log_queries:
            log_query_info(
                index=self._index.name,
                k=k,
                results=len(result),
                duration_ms=round((perf_counter() - start_time) * 1000, 3),
                distance=self._distance.name,
            )
        return result

    def get_knn_for_id(self, identifier: Hashable, k: int) -> KNNList:
        """Find the k nearest neighbors of the vector stored under an identifier.

        The vector itself is part of the result, at distance 0.
        """
        return self.get_knn_for_object(self._index.collection.get(identifier), k)

    def get_knn_for_bulk_ids(
        self, identifiers: Sequence[Hashable], k: int
    ) -> list[KNNList]:
        """kNN of several stored vectors, in the order given."""
        return [self.get_knn_for_id(identifier, k) for identifier in identifiers]

    def get_knn_for_bulk(
        self, queries: Sequence[Sequence[float]] | np.ndarray, k: int
    ) -> list[KNNList]:
        """kNN of several query vectors, in the order given."""
        return [self.get_knn_for_object(query, k) for query in queries]

    @abstractmethod
    def _search(self, query: np.ndarray, k: int) -> BoundedNeighborSet:
        """Concrete search implementation."""
        pass
