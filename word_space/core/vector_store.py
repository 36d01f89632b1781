"""
VectorStore: ordered, append-only word -> vector mapping.
Source of truth for the vocabulary and its dimensionality.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from word_space.core.errors import (
    DimensionMismatchError,
    DuplicateWordError,
    ValidationError,
    WordNotFoundError,
)
from word_space.core.vocabulary import word_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable point-in-time copy of the store."""
    words: tuple[str, ...]
    vectors: np.ndarray              # Read-only (n, dim) matrix, row i = index i
    version: int                     # Store length when taken (append-only, so unique)

    def __len__(self) -> int:
        return len(self.words)


class VectorStore:
    """
    Append-only store of word embeddings.

    Guarantees:
    - Words are unique (case-insensitive)
    - Index = insertion position, never reassigned or reused
    - All vectors share one dimensionality, fixed by the first append

    Appends and snapshot reads are serialized by a lock, so a snapshot never
    observes a half-applied append.
    """

    def __init__(self):
        self._words: list[str] = []
        self._vectors: list[np.ndarray] = []
        self._key_to_idx: dict[str, int] = {}
        self._dimension: Optional[int] = None
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def append(self, word: str, vector: Sequence[float]) -> int:
        """
        Append a word and its vector.

        Args:
            word: Display form of the word
            vector: 1-D sequence of floats

        Returns:
            The new, stable index of the word

        Raises:
            ValidationError: If the vector is not a non-empty 1-D numeric sequence
            DuplicateWordError: If the word already exists (case-insensitive)
            DimensionMismatchError: If the vector length differs from the store's
        """
        array = self._as_vector(vector)
        key = word_key(word)

        with self._lock:
            if key in self._key_to_idx:
                raise DuplicateWordError(word)
            if self._dimension is not None and len(array) != self._dimension:
                raise DimensionMismatchError(self._dimension, len(array))

            if self._dimension is None:
                self._dimension = len(array)
                logger.debug(f"Store dimensionality established at {self._dimension}")

            index = len(self._words)
            self._words.append(word)
            self._vectors.append(array)
            self._key_to_idx[key] = index

        return index

    @staticmethod
    def _as_vector(vector: Sequence[float]) -> np.ndarray:
        """Copy input into an immutable float64 vector."""
        try:
            array = np.array(vector, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Vector must be numeric: {e}") from e

        if array.ndim != 1 or array.size == 0:
            raise ValidationError(
                f"Vector must be a non-empty 1-D sequence, got shape {array.shape}"
            )

        array.setflags(write=False)
        return array

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, word: str) -> tuple[np.ndarray, int]:
        """
        Look up a word (case-insensitive).

        Returns:
            Tuple of (vector, index)

        Raises:
            WordNotFoundError: If the word is not stored
        """
        idx = self._key_to_idx.get(word_key(word))
        if idx is None:
            raise WordNotFoundError(word)
        return self._vectors[idx], idx

    def index_of(self, word: str) -> int:
        """Index of a word, raising WordNotFoundError if absent."""
        return self.get(word)[1]

    def word_at(self, index: int) -> str:
        """Display form of the word stored at `index`."""
        return self._words[index]

    def all(self) -> list[tuple[str, np.ndarray]]:
        """All (word, vector) pairs in insertion order, as a point-in-time copy."""
        with self._lock:
            return list(zip(self._words, self._vectors))

    def snapshot(self) -> StoreSnapshot:
        """Take an immutable snapshot for a projection or query pass."""
        with self._lock:
            words = tuple(self._words)
            if self._vectors:
                vectors = np.vstack(self._vectors)
            else:
                vectors = np.empty((0, self._dimension or 0), dtype=np.float64)

        vectors.setflags(write=False)
        return StoreSnapshot(words=words, vectors=vectors, version=len(words))

    @property
    def words(self) -> list[str]:
        """Words in insertion order."""
        return list(self._words)

    @property
    def dimension(self) -> Optional[int]:
        """Established dimensionality, or None while the store is empty."""
        return self._dimension

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word_key(word) in self._key_to_idx

    def __repr__(self) -> str:
        return f"VectorStore(n_words={len(self)}, dimension={self._dimension})"
