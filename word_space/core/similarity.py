"""
Cosine-distance similarity search over the vector store.
"""

import math
from typing import Optional, Sequence

import numpy as np

from word_space.core.errors import DimensionMismatchError
from word_space.core.vector_store import StoreSnapshot, VectorStore
import config


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine distance between two vectors: 1 - cos(a, b).

    Computed as 1 - dot(a, b) / sqrt(dot(a, a) * dot(b, b)), which is
    symmetric in its arguments and exactly 0 for identical vectors.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Distance in [0, 2], or +inf if either vector has zero norm

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatchError(len(a), len(b))

    denom = math.sqrt(float(np.dot(a, a)) * float(np.dot(b, b)))
    if denom == 0.0 or not math.isfinite(denom):
        return math.inf

    distance = 1.0 - float(np.dot(a, b)) / denom
    return distance if math.isfinite(distance) else math.inf


def cosine_distances(query: np.ndarray, vectors: np.ndarray) -> np.ndarray:
    """
    Vectorized cosine distance from `query` to every row of `vectors`.

    Degenerate rows (zero norm or non-finite) get +inf so they sort last.
    """
    query = np.asarray(query, dtype=np.float64)
    if vectors.shape[0] == 0:
        return np.empty(0, dtype=np.float64)
    if vectors.shape[1] != query.shape[0]:
        raise DimensionMismatchError(vectors.shape[1], query.shape[0])

    dots = vectors @ query
    denoms = np.sqrt(np.einsum("ij,ij->i", vectors, vectors) * np.dot(query, query))

    with np.errstate(divide="ignore", invalid="ignore"):
        distances = 1.0 - dots / denoms

    distances[~np.isfinite(distances) | (denoms == 0)] = np.inf
    return distances


class SimilarityIndex:
    """
    Brute-force k-nearest-neighbor search over a VectorStore.

    Every query takes a fresh snapshot and scans all vectors (O(n * d)).
    Words arrive one at a time, so any prebuilt index would be invalidated
    on each append; at interactive vocabulary sizes a full scan is cheaper.
    """

    def __init__(self, store: VectorStore):
        self.store = store

    def distances(self, query: Sequence[float], snapshot: Optional[StoreSnapshot] = None) -> np.ndarray:
        """Distances from `query` to every stored vector, in index order."""
        snapshot = snapshot if snapshot is not None else self.store.snapshot()
        return cosine_distances(np.asarray(query, dtype=np.float64), snapshot.vectors)

    def neighbors(
        self,
        query: Sequence[float],
        exclude_index: Optional[int] = None,
        k: int = config.DEFAULT_K_NEIGHBORS
    ) -> list[tuple[int, float]]:
        """
        Rank stored vectors by distance to `query`.

        Args:
            query: Query vector
            exclude_index: Index to leave out (the query word itself)
            k: Maximum number of results

        Returns:
            Up to k (index, distance) pairs, closest first; equal distances
            are ordered by ascending index

        Raises:
            ValueError: If k is negative
        """
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        if k == 0:
            return []

        distances = self.distances(query)

        # Stable sort keeps ascending index order among equal distances
        order = np.argsort(distances, kind="stable")
        if exclude_index is not None:
            order = order[order != exclude_index]

        return [(int(i), float(distances[i])) for i in order[:k]]

    def nearest(
        self,
        query: Sequence[float],
        exclude_index: Optional[int] = None,
        k: int = config.DEFAULT_K_NEIGHBORS
    ) -> list[int]:
        """Indices of the k nearest stored vectors (see `neighbors`)."""
        return [idx for idx, _ in self.neighbors(query, exclude_index=exclude_index, k=k)]
