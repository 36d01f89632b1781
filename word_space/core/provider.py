"""
EmbeddingProvider: turns words into vectors.

Two variants:
- EXTERNAL: a learned embedding model, loaded once in the background
- FALLBACK: the deterministic, dependency-free embedder

The provider prefers EXTERNAL whenever the model is loaded and responsive.
Once the model fails (at load time or on a later call) it is marked
unavailable for good and FALLBACK is used from then on.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import numpy as np

from word_space.core.errors import ProviderUnavailableError
from word_space.embedders.base import BaseEmbedder
from word_space.embedders.fallback import DeterministicEmbedder
import config

logger = logging.getLogger(__name__)


class EmbeddingVariant(str, Enum):
    """Which embedding capability produced a vector."""
    EXTERNAL = "external"
    FALLBACK = "fallback"


class ModelStatus(str, Enum):
    """Lifecycle of the external model."""
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Embedding:
    """A vector tagged with the variant that produced it."""
    vector: np.ndarray
    variant: EmbeddingVariant


class ExternalModel:
    """
    One-time, background-loaded external embedding model.

    `start_loading()` may be called any number of times; only the first call
    spawns the loader thread. Loading builds the backend via `factory` and
    embeds a probe word to make sure the model actually answers.

    Intended to be shared process-wide (the UI keeps a single instance in
    `st.cache_resource`), so the model is loaded at most once per process.
    """

    def __init__(
        self,
        factory: Callable[[], BaseEmbedder],
        probe_text: str = config.MODEL_PROBE_TEXT
    ):
        """
        Args:
            factory: Zero-argument callable returning the embedder backend
            probe_text: Word embedded once to verify the model responds
        """
        self._factory = factory
        self._probe_text = probe_text

        self._embedder: Optional[BaseEmbedder] = None
        self._status = ModelStatus.NOT_LOADED
        self._error: Optional[BaseException] = None

        self._lock = threading.Lock()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def status(self) -> ModelStatus:
        return self._status

    @property
    def error(self) -> Optional[BaseException]:
        """The failure that made the model unavailable, if any."""
        return self._error

    @property
    def dimension(self) -> Optional[int]:
        return self._embedder.dimension if self._embedder is not None else None

    @property
    def name(self) -> Optional[str]:
        return self._embedder.name if self._embedder is not None else None

    def start_loading(self) -> bool:
        """
        Begin loading in a background thread.

        Returns:
            True if this call started the load, False if a load already
            started (or finished) earlier
        """
        with self._lock:
            if self._status is not ModelStatus.NOT_LOADED:
                return False
            self._status = ModelStatus.LOADING
            self._thread = threading.Thread(
                target=self._load,
                name="external-model-loader",
                daemon=True
            )
            self._thread.start()

        logger.info("Loading external embedding model in the background...")
        return True

    def _load(self) -> None:
        try:
            embedder = self._factory()
            embedder.embed_single(self._probe_text)
        except Exception as e:
            logger.error(f"External embedding model failed to load: {e}")
            self._mark_unavailable(e)
        else:
            with self._lock:
                self._embedder = embedder
                self._status = ModelStatus.READY
            logger.info(f"External embedding model ready ({embedder.name}, {embedder.dimension}d)")
        finally:
            self._done.set()

    def wait(self, timeout: Optional[float] = None) -> ModelStatus:
        """
        Block until loading finishes or `timeout` seconds pass.

        Returns immediately if loading was never started.

        Returns:
            The status after waiting
        """
        if self._status is ModelStatus.LOADING:
            self._done.wait(timeout)
        return self._status

    def embed(self, text: str) -> np.ndarray:
        """
        Embed one word with the external model.

        Raises:
            ProviderUnavailableError: If the model is not ready or the call
                fails (a failure marks the model unavailable permanently)
        """
        if self._status is not ModelStatus.READY:
            raise ProviderUnavailableError(f"External model is {self._status.value}")

        try:
            return np.asarray(self._embedder.embed_single(text), dtype=np.float64)
        except Exception as e:
            logger.error(f"External embedding failed for {text!r}: {e}")
            self._mark_unavailable(e)
            raise ProviderUnavailableError(str(e)) from e

    def _mark_unavailable(self, error: BaseException) -> None:
        with self._lock:
            self._status = ModelStatus.UNAVAILABLE
            self._error = error
            self._embedder = None


class EmbeddingProvider:
    """
    Dispatches between the external model and the deterministic fallback.

    Words are lowercased before embedding.
    """

    def __init__(
        self,
        external: Optional[ExternalModel] = None,
        fallback: Optional[DeterministicEmbedder] = None,
        load_timeout: float = config.MODEL_LOAD_TIMEOUT
    ):
        """
        Args:
            external: Shared external model, or None to always use the fallback
            fallback: Deterministic embedder (defaults to 100 dimensions)
            load_timeout: Seconds to wait for a loading model before falling back
        """
        self.external = external
        self.fallback = fallback or DeterministicEmbedder()
        self.load_timeout = load_timeout

    @property
    def active_variant(self) -> EmbeddingVariant:
        """Variant that would embed the next word right now."""
        if self.external is not None and self.external.status is ModelStatus.READY:
            return EmbeddingVariant.EXTERNAL
        return EmbeddingVariant.FALLBACK

    @property
    def model_status(self) -> ModelStatus:
        if self.external is None:
            return ModelStatus.UNAVAILABLE
        return self.external.status

    def dimension_for(self, variant: EmbeddingVariant) -> Optional[int]:
        """Vector length produced by a variant (None if not known yet)."""
        if variant is EmbeddingVariant.FALLBACK:
            return self.fallback.dimension
        return self.external.dimension if self.external is not None else None

    def start(self) -> None:
        """Kick off the external model load (idempotent)."""
        if self.external is not None:
            self.external.start_loading()

    def embed(
        self,
        word: str,
        require: Optional[EmbeddingVariant] = None,
        wait: bool = True
    ) -> Embedding:
        """
        Embed a word with the preferred available variant.

        Args:
            word: Word to embed (lowercased before embedding)
            require: Force FALLBACK; EXTERNAL or None means "prefer external"
            wait: Whether to wait (up to `load_timeout`) for a loading model

        Returns:
            Embedding tagged with the variant used
        """
        text = word.lower()

        if require is not EmbeddingVariant.FALLBACK and self.external is not None:
            if wait and self.external.status is ModelStatus.LOADING:
                logger.info("Waiting for external model to finish loading...")
                self.external.wait(self.load_timeout)

            if self.external.status is ModelStatus.READY:
                try:
                    return Embedding(self.external.embed(text), EmbeddingVariant.EXTERNAL)
                except ProviderUnavailableError:
                    logger.warning(f"Falling back to deterministic embedding for {text!r}")

        return Embedding(self.fallback.embed_single(text), EmbeddingVariant.FALLBACK)
