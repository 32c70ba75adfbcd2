"""Distance functions over float64 vectors.

The kd-tree search prunes a subtree when the gap between the query and a
splitting plane along a single axis already exceeds the current k-th
distance. That is only sound when every distance is bounded below by the
absolute difference along any one axis, which holds for unweighted Lp norms
with ``p >= 1``. ``LPNormDistance`` marks that family; anything else (cosine
distance here) can only be served by an exhaustive scan.
"""

import logging
import math
from typing import Protocol, runtime_checkable

import numpy as np

from kdindex.core.config import settings

logger = logging.getLogger(__name__)


@runtime_checkable
class DistanceFunction(Protocol):
    """Protocol for distance functions usable by the indexes."""

    @property
    def name(self) -> str:
        """Short identifier of the distance."""
        ...

    def distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        """Distance between two vectors of equal dimension."""
        ...


class LPNormDistance:
    """Minkowski distance ``(sum |x_i - y_i|^p)^(1/p)`` for ``p >= 1``."""

    def __init__(self, p: float = 2.0) -> None:
        p = float(p)
        if math.isnan(p) or p < 1.0:
            raise ValueError(f"Lp norm requires p >= 1, got {p}")
        self._p = p

    @property
    def p(self) -> float:
        return self._p

    @property
    def name(self) -> str:
        return f"minkowski(p={self._p:g})"

    def distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        return float(np.linalg.norm(v1 - v2, ord=self._p))

    def axis_gap(self, delta: float) -> float:
        """Norm of a difference along a single axis.

        Rounded the same way as ``distance``, so it never exceeds the
        computed distance of a vector at least ``|delta|`` away on that axis.
        """
        return float(np.linalg.norm(np.array([delta], dtype=np.float64), ord=self._p))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LPNormDistance) and other.p == self._p

    def __hash__(self) -> int:
        return hash((LPNormDistance, self._p))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(p={self._p:g})"


class ManhattanDistance(LPNormDistance):
    """L1 norm."""

    def __init__(self) -> None:
        super().__init__(1.0)

    @property
    def name(self) -> str:
        return "manhattan"


class EuclideanDistance(LPNormDistance):
    """L2 norm."""

    def __init__(self) -> None:
        super().__init__(2.0)

    @property
    def name(self) -> str:
        return "euclidean"


class MaximumDistance(LPNormDistance):
    """L-infinity norm (Chebyshev distance)."""

    def __init__(self) -> None:
        super().__init__(math.inf)

    @property
    def name(self) -> str:
        return "maximum"


class CosineDistance:
    """Cosine distance ``1 - cos(v1, v2)``. Not a norm of the difference."""

    @property
    def name(self) -> str:
        return "cosine"

    def distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        norms = np.linalg.norm(v1) * np.linalg.norm(v2)
        if norms == 0:
            return 1.0  # Maximum distance for zero vectors
        return float(1.0 - np.dot(v1, v2) / norms)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def is_lp_norm(distance: DistanceFunction) -> bool:
    """True if the distance admits per-axis lower bounds."""
    return isinstance(distance, LPNormDistance)


_NAMED_DISTANCES = {
    "euclidean": EuclideanDistance,
    "l2": EuclideanDistance,
    "manhattan": ManhattanDistance,
    "l1": ManhattanDistance,
    "maximum": MaximumDistance,
    "chebyshev": MaximumDistance,
    "linf": MaximumDistance,
    "cosine": CosineDistance,
}


def get_distance(name: str | None = None, p: float | None = None) -> DistanceFunction:
    """Look up a distance function by name."""
    if name is None:
        name = settings.default_distance

    name = name.lower().strip()

    if name in ("minkowski", "lp"):
        return LPNormDistance(settings.default_minkowski_p if p is None else p)

    try:
        distance_cls = _NAMED_DISTANCES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported distance: {name}. "
            f"Supported distances: {', '.join(sorted(_NAMED_DISTANCES))}, minkowski"
        ) from None

    if p is not None:
        logger.warning(f"Ignoring p={p} for fixed distance '{name}'")
    return distance_cls()
