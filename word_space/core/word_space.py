"""
WordSpace: central coordinator for Word-Space.
Owns the vocabulary, the 3D layout and the selection for one session.
"""

import logging
from typing import Callable, Optional

import numpy as np
import pandas as pd

from word_space.core.errors import DimensionMismatchError, DuplicateWordError, ProjectionFailedError
from word_space.core.projector import ProjectionResult, UMAPProjector
from word_space.core.provider import EmbeddingProvider, EmbeddingVariant
from word_space.core.selection import SelectionController, SelectionState
from word_space.core.similarity import SimilarityIndex
from word_space.core.vector_store import VectorStore
from word_space.core.vocabulary import validate_word
from word_space.loaders.base import BaseVocabularyLoader, get_loader
import config

logger = logging.getLogger(__name__)


class WordSpace:
    """
    Single owner of all session state.

    Responsibilities:
    - Seed the vocabulary from a loader
    - Embed, store and project user-added words
    - Keep the 3D layout in step with the store (stale layouts are dropped)
    - Drive the selection state machine

    Every mutation goes through this object, so the store, the layout and
    the selection never disagree about the vocabulary.
    """

    def __init__(
        self,
        provider: Optional[EmbeddingProvider] = None,
        vocab_loader: Optional[BaseVocabularyLoader] = None,
        projector: Optional[UMAPProjector] = None,
        k: int = config.DEFAULT_K_NEIGHBORS
    ):
        """
        Initialize the WordSpace.

        Args:
            provider: Embedding provider (defaults to fallback-only)
            vocab_loader: Seed vocabulary loader (defaults to config.DEFAULT_VOCAB_LOADER)
            projector: 3D projector (defaults to UMAPProjector)
            k: Number of neighbors highlighted for the active word
        """
        self.provider = provider or EmbeddingProvider()
        self.vocab_loader = vocab_loader or get_loader(config.DEFAULT_VOCAB_LOADER)
        self.projector = projector or UMAPProjector()

        self.store = VectorStore()
        self.index = SimilarityIndex(self.store)
        self.selection = SelectionController(self.store, self.index, k=k)

        # Per-entry metadata, aligned with store indices
        self._sources: list[str] = []
        self._variants: list[EmbeddingVariant] = []

        # Variant that established the store's dimensionality
        self._variant: Optional[EmbeddingVariant] = None

        self._layout: Optional[ProjectionResult] = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if the seed vocabulary has been loaded."""
        return self._initialized

    @property
    def variant(self) -> Optional[EmbeddingVariant]:
        """Embedding variant every stored vector comes from."""
        return self._variant

    @property
    def n_words(self) -> int:
        return len(self.store)

    @property
    def n_added(self) -> int:
        """Number of words added by the user this session."""
        return self._sources.count(config.SOURCE_ADDED)

    @property
    def coordinates(self) -> Optional[np.ndarray]:
        """Latest (n, 3) layout, or None while fewer than 2 words exist."""
        return self._layout.coords if self._layout is not None else None

    @property
    def has_layout(self) -> bool:
        """Whether the layout covers the whole current vocabulary."""
        return self._layout is not None and self._layout.version == len(self.store)

    @property
    def selection_state(self) -> SelectionState:
        return self.selection.state

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def initialize(self, progress_callback: Optional[Callable[[str], None]] = None) -> None:
        """
        Load the seed vocabulary, embed it and compute the first layout.

        Args:
            progress_callback: Optional callable(message: str) for progress updates

        This method:
        1. Starts the external model load (waits up to the configured timeout)
        2. Loads the seed words
        3. Embeds and stores every seed word
        4. Projects the vocabulary to 3D
        """
        if self._initialized:
            return

        def log(msg: str):
            if progress_callback:
                progress_callback(msg)
            logger.info(msg)

        log("Loading embedding model...")
        self.provider.start()
        self._wait_for_model()
        variant = self.provider.active_variant
        log(f"Using {variant.value} embeddings ({self.provider.dimension_for(variant)} dimensions)")

        log(f"Loading vocabulary from {self.vocab_loader.name}...")
        words = self.vocab_loader.load()

        n_words = len(words)
        for i, word in enumerate(words, 1):
            if word in self.store:
                logger.warning(f"Skipping duplicate seed word {word!r}")
                continue
            try:
                self._embed_and_append(word, config.SOURCE_SEED)
            except DimensionMismatchError as e:
                logger.warning(f"Skipping seed word {word!r}: {e}")
                continue
            if i % 10 == 0 or i == n_words:
                log(f"Embedded {i}/{n_words} words...")

        log("Computing 3D layout...")
        try:
            self.refresh_projection()
        except ProjectionFailedError as e:
            log(f"{e}. The layout will be retried on the next added word.")

        self._initialized = True
        log(f"Ready! {len(self.store)} words loaded.")

    def _wait_for_model(self) -> None:
        external = self.provider.external
        if external is not None:
            external.wait(self.provider.load_timeout)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_word(self, text: str) -> int:
        """
        Add a user-entered word, re-project, and select it.

        Args:
            text: Raw user input

        Returns:
            Store index of the new word

        Raises:
            ValidationError: If the input is not a word of letters
            DuplicateWordError: If the word is already in the vocabulary
            DimensionMismatchError: If the available embedding variant does not
                match the store (nothing is changed)
            ProjectionFailedError: If the new layout could not be computed; the
                word stays stored and selected, rendering waits for a layout
        """
        word = validate_word(text)
        if word in self.store:
            raise DuplicateWordError(word)

        index = self._embed_and_append(word, config.SOURCE_ADDED)
        logger.info(f"Added {word!r} at index {index}")

        self.selection.word_added(word)
        self.refresh_projection()
        return index

    def _embed_and_append(self, word: str, source: str) -> int:
        # A store seeded with fallback vectors stays on the fallback
        require = EmbeddingVariant.FALLBACK if self._variant is EmbeddingVariant.FALLBACK else None
        embedding = self.provider.embed(word, require=require)

        index = self.store.append(word, embedding.vector)
        self._sources.append(source)
        self._variants.append(embedding.variant)

        if self._variant is None:
            self._variant = embedding.variant

        return index

    def select(self, word: str) -> SelectionState:
        """Toggle selection of a stored word (see SelectionController.select)."""
        return self.selection.select(word)

    def clear_selection(self) -> SelectionState:
        return self.selection.clear()

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def refresh_projection(self) -> Optional[ProjectionResult]:
        """
        Recompute the 3D layout from scratch.

        Returns:
            The accepted result, or None if fewer than 2 words exist
            (rendering must wait) or the result went stale

        Raises:
            ProjectionFailedError: If the projector raised; the layout is
                cleared, vocabulary and selection are untouched
        """
        snapshot = self.store.snapshot()
        if len(snapshot) < 2:
            self._layout = None
            logger.debug("Fewer than 2 words, layout cleared")
            return None

        try:
            result = self.projector.project_snapshot(snapshot)
        except Exception as e:
            self._layout = None
            logger.exception(f"Projection of {len(snapshot)} words failed")
            raise ProjectionFailedError(
                f"Could not compute the 3D layout for {len(snapshot)} words: {e}"
            ) from e

        return result if self.accept_projection(result) else None

    def accept_projection(self, result: ProjectionResult) -> bool:
        """
        Install a projection result unless the store has moved on.

        A result computed from an older snapshot is discarded, never merged.

        Returns:
            True if the result became the current layout
        """
        if result.version != len(self.store) or len(result) != result.version:
            logger.info(
                f"Discarding stale layout for {result.version} words "
                f"(store has {len(self.store)})"
            )
            return False

        self._layout = result
        return True

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def source_of(self, index: int) -> str:
        """Whether the word at `index` came from the seed file or the user."""
        return self._sources[index]

    def neighbors(self) -> list[tuple[str, int, float]]:
        """
        Neighbors of the active word with their distances.

        Returns:
            List of (word, index, distance), closest first; empty when idle
        """
        if not self.selection.is_active:
            return []

        vector, _ = self.store.get(self.selection.active_word)
        distances = self.index.distances(vector)
        return [
            (self.store.word_at(i), i, float(distances[i]))
            for i in self.selection.neighbor_indices
        ]

    def to_frame(self) -> pd.DataFrame:
        """
        One row per word for the rendering layer.

        Columns: index, word, source, variant, x, y, z, role, distance.
        Coordinates are NaN while no current layout exists; `role` is
        "active", "neighbor" or "word"; `distance` is set for neighbors only.
        """
        n = len(self.store)
        df = pd.DataFrame({
            "index": np.arange(n),
            "word": self.store.words,
            "source": self._sources[:n],
            "variant": [v.value for v in self._variants[:n]],
        })

        if self.has_layout:
            coords = self._layout.coords
        else:
            coords = np.full((n, 3), np.nan)
        df["x"] = coords[:, 0]
        df["y"] = coords[:, 1]
        df["z"] = coords[:, 2]

        df["role"] = "word"
        df["distance"] = np.nan
        if self.selection.is_active:
            for _, i, distance in self.neighbors():
                df.loc[i, "role"] = "neighbor"
                df.loc[i, "distance"] = distance
            df.loc[self.store.index_of(self.selection.active_word), "role"] = "active"

        return df
