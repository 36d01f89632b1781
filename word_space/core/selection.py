"""
SelectionController: which word is active and which neighbors light up.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from word_space.core.similarity import SimilarityIndex
from word_space.core.vector_store import VectorStore
from word_space.core.vocabulary import word_key
import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    """Active word plus its nearest neighbors, closest first."""
    active_word: Optional[str] = None
    neighbor_indices: tuple[int, ...] = ()

    @property
    def is_idle(self) -> bool:
        return self.active_word is None


IDLE = SelectionState()


class SelectionController:
    """
    State machine over SelectionState.

    States:
    - Idle: no active word, no neighbors
    - Active(word): neighbors are the k nearest words, excluding the word itself

    Transitions:
    - select(word): toggles off if `word` is already active, else activates it
    - clear(): back to Idle
    - word_added(word): always activates the new word
    """

    def __init__(
        self,
        store: VectorStore,
        index: Optional[SimilarityIndex] = None,
        k: int = config.DEFAULT_K_NEIGHBORS
    ):
        self.store = store
        self.index = index or SimilarityIndex(store)
        self.k = k
        self._state = IDLE

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def active_word(self) -> Optional[str]:
        return self._state.active_word

    @property
    def neighbor_indices(self) -> tuple[int, ...]:
        return self._state.neighbor_indices

    @property
    def is_active(self) -> bool:
        return not self._state.is_idle

    def select(self, word: str) -> SelectionState:
        """
        Toggle selection of `word`.

        Raises:
            WordNotFoundError: If the word is not in the store (state unchanged)
        """
        if self.is_active and word_key(word) == word_key(self._state.active_word):
            logger.debug(f"Deselected {self._state.active_word!r}")
            return self.clear()
        return self._activate(word)

    def clear(self) -> SelectionState:
        """Force Idle."""
        self._state = IDLE
        return self._state

    def word_added(self, word: str) -> SelectionState:
        """Auto-select a freshly added word."""
        return self._activate(word)

    def refresh(self) -> SelectionState:
        """Recompute neighbors of the active word against the current store."""
        if self.is_active:
            return self._activate(self._state.active_word)
        return self._state

    def highlighted_indices(self) -> set[int]:
        """Store indices to highlight: the active word and its neighbors."""
        if not self.is_active:
            return set()
        highlighted = set(self._state.neighbor_indices)
        highlighted.add(self.store.index_of(self._state.active_word))
        return highlighted

    def _activate(self, word: str) -> SelectionState:
        vector, idx = self.store.get(word)
        neighbors = self.index.nearest(vector, exclude_index=idx, k=self.k)
        self._state = SelectionState(
            active_word=self.store.word_at(idx),
            neighbor_indices=tuple(neighbors)
        )
        logger.debug(f"Selected {self._state.active_word!r} with neighbors {neighbors}")
        return self._state
