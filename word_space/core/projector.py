"""
UMAP projection for dimensionality reduction.
Recomputes the 3D layout of the whole vocabulary from scratch.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import numpy as np
import umap

from word_space.core.errors import ProjectionPreconditionError
from word_space.core.similarity import cosine_distance
from word_space.core.vector_store import StoreSnapshot
import config

logger = logging.getLogger(__name__)

# umap-learn rejects n_neighbors below this
UMAP_MIN_NEIGHBORS = 2

# umap-learn fails on fewer samples than this; two words are laid out directly
UMAP_MIN_SAMPLES = 3


@dataclass(frozen=True)
class ProjectionResult:
    """3D coordinates for one store snapshot."""
    coords: np.ndarray               # (n, 3), row i = store index i
    version: int                     # Snapshot version the coords belong to

    def __len__(self) -> int:
        return len(self.coords)


class UMAPProjector:
    """
    Facade over UMAP for the 3D word layout.

    Features:
    - Fits a fresh UMAP on every call (no incremental layout reuse)
    - Shrinks the neighborhood for tiny vocabularies
    - Fixed spread/min_dist tuned for visual separation
    """

    def __init__(
        self,
        n_components: int = config.UMAP_N_COMPONENTS,
        max_neighbors: int = config.UMAP_MAX_NEIGHBORS,
        spread: float = config.UMAP_SPREAD,
        min_dist: float = config.UMAP_MIN_DIST,
        metric: str = config.UMAP_METRIC,
        init: str = config.UMAP_INIT,
        random_state: Optional[int] = config.UMAP_RANDOM_STATE,
        reducer_factory: Optional[Callable[..., Any]] = None
    ):
        """
        Initialize UMAP projector.

        Args:
            n_components: Output dimensions (default: 3)
            max_neighbors: Upper bound for n_neighbors (default: 5)
            spread: Effective scale of embedded points (default: 5.0)
            min_dist: Minimum distance between points (default: 0.8)
            metric: Distance metric (default: "cosine")
            init: Layout initialization (default: "random")
            random_state: Random seed for reproducibility
            reducer_factory: Callable building the reducer (default: umap.UMAP)
        """
        self.n_components = n_components
        self.max_neighbors = max_neighbors
        self.spread = spread
        self.min_dist = min_dist
        self.metric = metric
        self.init = init
        self.random_state = random_state
        self.reducer_factory = reducer_factory or umap.UMAP

    def neighborhood_size(self, n_samples: int) -> int:
        """Neighborhood for `n_samples` points: min(max_neighbors, n - 1)."""
        return min(self.max_neighbors, n_samples - 1)

    def reducer_params(self, n_samples: int) -> dict:
        """Keyword arguments handed to the reducer for `n_samples` points."""
        return {
            "n_components": self.n_components,
            # umap-learn shrinks its effective neighborhood to n - 1 itself
            "n_neighbors": max(UMAP_MIN_NEIGHBORS, self.neighborhood_size(n_samples)),
            "spread": self.spread,
            "min_dist": self.min_dist,
            "metric": self.metric,
            "init": self.init,
            "random_state": self.random_state,
        }

    def project(self, vectors: Sequence[Sequence[float]]) -> np.ndarray:
        """
        Project vectors to 3D.

        Args:
            vectors: Ordered sequence of equal-length vectors, shape (n, dim)

        Returns:
            Array of shape (n, n_components), row i for input i

        Raises:
            ProjectionPreconditionError: If there are fewer than 2 vectors or
                the input is not a 2-D array
        """
        embeddings = np.asarray(vectors, dtype=np.float64)
        if embeddings.ndim != 2:
            raise ProjectionPreconditionError(
                f"Expected a 2-D array of vectors, got shape {embeddings.shape}"
            )

        n_samples = len(embeddings)
        if n_samples < 2:
            raise ProjectionPreconditionError(
                f"Need at least 2 words to project, got {n_samples}"
            )

        if n_samples < UMAP_MIN_SAMPLES:
            return self._pair_layout(embeddings)

        params = self.reducer_params(n_samples)
        logger.info(
            f"Fitting UMAP ({self.n_components}D) on {n_samples} vectors "
            f"(n_neighbors={self.neighborhood_size(n_samples)})..."
        )

        reducer = self.reducer_factory(**params)

        # Tiny vocabularies routinely trigger UMAP warnings about graph size
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", message=".*n_neighbors is larger than the dataset size.*")
            warnings.filterwarnings("ignore", message=".*Spectral initialisation failed.*")
            warnings.filterwarnings("ignore", message=".*n_jobs value.*overridden.*")
            coords = np.asarray(reducer.fit_transform(embeddings), dtype=np.float64)

        if coords.shape != (n_samples, self.n_components):
            raise RuntimeError(
                f"Projection returned shape {coords.shape}, "
                f"expected {(n_samples, self.n_components)}"
            )

        return coords

    def _pair_layout(self, embeddings: np.ndarray) -> np.ndarray:
        """
        Place two words symmetrically on the x axis.

        Their separation is the cosine distance scaled by `spread`; a
        degenerate pair is placed `spread` apart.
        """
        distance = cosine_distance(embeddings[0], embeddings[1])
        if not np.isfinite(distance):
            distance = 1.0
        half = self.spread * distance / 2

        coords = np.zeros((2, self.n_components))
        coords[0, 0] = -half
        coords[1, 0] = half
        logger.info(f"Laid out 2 vectors directly (cosine distance {distance:.3f})")
        return coords

    def project_snapshot(self, snapshot: StoreSnapshot) -> ProjectionResult:
        """Project a store snapshot, tagging the result with its version."""
        return ProjectionResult(coords=self.project(snapshot.vectors), version=snapshot.version)
