"""Result types returned by kNN queries."""

import math
from collections.abc import Hashable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Neighbor:
    """A single query result: an identifier and its distance to the query."""

    id: Hashable
    distance: float

    def as_tuple(self) -> tuple[Hashable, float]:
        return (self.id, self.distance)


@dataclass(frozen=True)
class KNNList:
    """Neighbors of a query ordered by ascending distance.

    Attributes:
        k: Number of neighbors requested
        neighbors: At most ``k`` neighbors, closest first
    """

    k: int
    neighbors: tuple[Neighbor, ...] = ()

    def __post_init__(self) -> None:
        if len(self.neighbors) > self.k:
            raise ValueError(
                f"KNNList holds {len(self.neighbors)} neighbors but k={self.k}"
            )
        for previous, current in zip(self.neighbors, self.neighbors[1:]):
            if current.distance < previous.distance:
                raise ValueError("Neighbors must be sorted by distance (ascending)")

    def __len__(self) -> int:
        return len(self.neighbors)

    def __iter__(self) -> Iterator[Neighbor]:
        return iter(self.neighbors)

    def __getitem__(self, item: int) -> Neighbor:
        return self.neighbors[item]

    @property
    def is_empty(self) -> bool:
        return not self.neighbors

    @property
    def knn_distance(self) -> float:
        """Distance of the k-th neighbor, +inf while fewer than k were found."""
        if self.k == 0 or len(self.neighbors) < self.k:
            return math.inf
        return self.neighbors[-1].distance

    def ids(self) -> list[Hashable]:
        return [neighbor.id for neighbor in self.neighbors]

    def distances(self) -> list[float]:
        return [neighbor.distance for neighbor in self.neighbors]

    def as_tuples(self) -> list[tuple[Hashable, float]]:
        """Results as ``(identifier, distance)`` pairs."""
        return [neighbor.as_tuple() for neighbor in self.neighbors]
