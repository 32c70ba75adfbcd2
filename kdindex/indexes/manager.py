"""Index management with distance-based selection, thread-safety and factories."""

import logging
from collections.abc import Hashable, Sequence
from typing import Any

import numpy as np

from kdindex.core.config import settings
from kdindex.domain import KNNList, UnsupportedDistanceError, VectorCollection
from kdindex.utils import RWLock

from .base import BaseVectorIndex, KNNQuery
from .distance import DistanceFunction, get_distance, is_lp_norm
from .kdtree import KDTreeIndex
from .linear import LinearScanIndex

logger = logging.getLogger(__name__)

_MANAGER_MODES = ("auto", "kdtree", "linear")


def create_index(
    index_type: str | None, collection: VectorCollection, **kwargs: Any
) -> BaseVectorIndex:
    """Factory to create index instances over a collection."""
    if index_type is None:
        index_type = settings.default_index_type

    index_type = index_type.lower().strip()

    if index_type in ("kdtree", "auto"):
        return KDTreeIndex(collection, **kwargs)
    elif index_type == "linear":
        if kwargs:
            raise ValueError(
                f"Options not supported by linear index: {', '.join(sorted(kwargs))}"
            )
        return LinearScanIndex(collection)
    else:
        raise ValueError(
            f"Unsupported index type: {index_type}. "
            f"Supported types: auto, kdtree, linear"
        )


def recommend_index_type(distance: DistanceFunction) -> str:
    """Best index type able to answer exact kNN queries for a distance."""
    return "kdtree" if is_lp_norm(distance) else "linear"


class ThreadSafeKNNQuery:
    """Searcher wrapper holding the manager's read lock during each query."""

    def __init__(self, query: KNNQuery, lock: RWLock) -> None:
        self._query = query
        self._lock = lock

    @property
    def distance(self) -> DistanceFunction:
        return self._query.distance

    @property
    def wrapped(self) -> KNNQuery:
        return self._query

    def get_knn_for_object(
        self, query: Sequence[float] | np.ndarray, k: int
    ) -> KNNList:
        """Query by vector (thread-safe)."""
        with self._lock.read_lock():
            return self._query.get_knn_for_object(query, k)

    def get_knn_for_id(self, identifier: Hashable, k: int) -> KNNList:
        """Query by stored identifier (thread-safe)."""
        with self._lock.read_lock():
            return self._query.get_knn_for_id(identifier, k)

    def get_knn_for_bulk_ids(
        self, identifiers: Sequence[Hashable], k: int
    ) -> list[KNNList]:
        """Query several stored identifiers under one read lock."""
        with self._lock.read_lock():
            return self._query.get_knn_for_bulk_ids(identifiers, k)

    def get_knn_for_bulk(
        self, queries: Sequence[Sequence[float]] | np.ndarray, k: int
    ) -> list[KNNList]:
        """Query several vectors under one read lock."""
        with self._lock.read_lock():
            return self._query.get_knn_for_bulk(queries, k)


class IndexManager:
    """Entry point owning the indexes over one collection.

    In ``"auto"`` mode a kd-tree serves every Lp norm and a linear scan
    serves any other distance. In ``"kdtree"`` mode other distances are
    rejected with ``UnsupportedDistanceError``.
    """

    def __init__(
        self,
        collection: VectorCollection,
        index_type: str | None = None,
        thread_safe: bool | None = None,
        **index_kwargs: Any,
    ) -> None:
        if index_type is None:
            index_type = settings.default_index_type
        index_type = index_type.lower().strip()
        if index_type not in _MANAGER_MODES:
            raise ValueError(
                f"Unsupported index type: {index_type}. "
                f"Supported types: {', '.join(_MANAGER_MODES)}"
            )
        if thread_safe is None:
            thread_safe = settings.thread_safe

        self._collection = collection
        self._index_type = index_type
        self._thread_safe = thread_safe
        self._lock = RWLock()

        self._primary = create_index(index_type, collection, **index_kwargs)
        self._fallback: LinearScanIndex | None = (
            LinearScanIndex(collection) if index_type == "auto" else None
        )

        logger.debug(
            f"Initialized IndexManager with type={index_type}, thread_safe={thread_safe}"
        )

    @property
    def index(self) -> BaseVectorIndex:
        return self._primary

    @property
    def is_built(self) -> bool:
        """True if index is built."""
        return self._primary.is_built

    @property
    def size(self) -> int:
        """Number of vectors in index."""
        return self._primary.size

    @property
    def dim(self) -> int:
        return self._primary.dim

    def build(self) -> None:
        """Build the indexes; blocks until running queries have finished."""
        with self._lock.write_lock():
            self._primary.build()
            if self._fallback is not None:
                self._fallback.build()

        logger.info(f"Built {self._primary.name} index with {self.size} vectors")

    def get_knn_query(
        self, distance: DistanceFunction | str | None = None
    ) -> KNNQuery:
        """Searcher for a distance, falling back to linear scan in auto mode."""
        if distance is None or isinstance(distance, str):
            distance = get_distance(distance)

        query = self._primary.get_knn_query(distance)
        if query is None:
            if self._fallback is None:
                raise UnsupportedDistanceError(self._primary.name, distance.name)
            logger.info(
                f"Distance '{distance.name}' not supported by {self._primary.name}, "
                f"using {self._fallback.name}"
            )
            query = self._fallback.get_knn_query(distance)

        if self._thread_safe:
            return ThreadSafeKNNQuery(query, self._lock)
        return query

    def knn(
        self,
        query: Sequence[float] | np.ndarray,
        k: int | None = None,
        distance: DistanceFunction | str | None = None,
    ) -> KNNList:
        """Find the k nearest neighbors of a query vector."""
        if k is None:
            k = settings.default_k
        return self.get_knn_query(distance).get_knn_for_object(query, k)

    def get_stats(self) -> dict[str, Any]:
        """Index statistics."""
        stats = self._primary.get_stats().model_dump()
        stats["manager_config"] = {
            "index_type": self._index_type,
            "thread_safe": self._thread_safe,
            "fallback": self._fallback.name if self._fallback is not None else None,
        }
        return stats
