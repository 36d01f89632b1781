"""
Deterministic fallback embedder.
Dependency-free word vectors used when the external model is unavailable.
"""

import numpy as np

from .base import BaseEmbedder, register_embedder
import config


@register_embedder("fallback")
class DeterministicEmbedder(BaseEmbedder):
    """
    Pure function from word to a fixed-length vector.

    Each character maps to c = ord(char) - ord('a') + 1, repeated cyclically
    to fill the vector, and component i is sin(c * i / dim) * cos(c).

    The vectors are comparable with each other but not with vectors from
    any learned model. They are not normalized.
    """

    def __init__(self, dimension: int = config.FALLBACK_EMBEDDING_DIM):
        if dimension <= 0:
            raise ValueError(f"dimension must be positive, got {dimension}")
        self._dimension = dimension

    @property
    def name(self) -> str:
        return f"fallback_{self._dimension}d"

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, texts: list[str]) -> np.ndarray:
        if not texts:
            return np.array([]).reshape(0, self.dimension)
        return np.vstack([self._embed_word(text) for text in texts])

    def _embed_word(self, word: str) -> np.ndarray:
        if not word:
            raise ValueError("Cannot embed an empty word")

        char_values = np.array([ord(ch) - ord("a") + 1 for ch in word], dtype=np.float64)
        positions = np.arange(self._dimension)
        values = char_values[positions % len(char_values)]

        return np.sin(values * (positions / self._dimension)) * np.cos(values)
