"""Shared test fixtures and configuration."""

import contextlib
import logging
from collections.abc import Callable

import numpy as np
import pytest

from kdindex.domain import VectorCollection
from kdindex.indexes import DistanceFunction, KDTreeIndex


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests to avoid interference."""
    library_logger = logging.getLogger("kdindex")
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    yield

    logging.root.handlers = original_handlers
    logging.root.level = original_level
    library_logger.handlers = []
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True


@pytest.fixture
def capture_logger(caplog: pytest.LogCaptureFixture):
    """Capture records of a (possibly non-propagating) logger."""

    @contextlib.contextmanager
    def _capture(logger_name: str, level: int = logging.INFO):
        logger = logging.getLogger(logger_name)
        with caplog.at_level(level, logger=logger_name):
            logger.addHandler(caplog.handler)
            try:
                yield
            finally:
                logger.removeHandler(caplog.handler)

    return _capture


@pytest.fixture
def scenario_collection() -> VectorCollection:
    """Four 2-D points: three around the origin and one far away."""
    return VectorCollection.from_mapping(
        {
            "A": [0.0, 0.0],
            "B": [1.0, 0.0],
            "C": [0.0, 1.0],
            "D": [5.0, 5.0],
        }
    )


@pytest.fixture
def scenario_tree(scenario_collection) -> KDTreeIndex:
    """Built kd-tree over the scenario points."""
    tree = KDTreeIndex(scenario_collection)
    tree.build()
    return tree


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator."""
    return np.random.default_rng(20240611)


@pytest.fixture
def brute_force() -> Callable[..., list[tuple[object, float]]]:
    """Exhaustive kNN: k smallest distances, ties by insertion order."""

    def _brute_force(
        collection: VectorCollection,
        distance: DistanceFunction,
        query: np.ndarray,
        k: int,
    ) -> list[tuple[object, float]]:
        query = np.asarray(query, dtype=np.float64)
        scored = sorted(
            (distance.distance(query, collection.vector_at(position)), position)
            for position in range(len(collection))
        )
        return [
            (collection.identifier_at(position), dist) for dist, position in scored[:k]
        ]

    return _brute_force
