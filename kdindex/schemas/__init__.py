"""Pydantic schemas describing index state."""

from .index import IndexAlgo, IndexStats, MemoryUsage

__all__ = [
    "IndexAlgo",
    "IndexStats",
    "MemoryUsage",
]
