"""
OpenAI embedding backend.
The external model behind Word-Space: text-embedding-3-small by default.
"""

import logging
import os
import time
from typing import Optional

import numpy as np
import openai
from dotenv import load_dotenv

from .base import BaseEmbedder, register_embedder
import config

load_dotenv()

logger = logging.getLogger(__name__)


@register_embedder("openai")
class OpenAIEmbedder(BaseEmbedder):
    """
    Word vectors from the OpenAI embeddings endpoint.

    Words are sent in batches of `batch_size`; rate-limit responses are
    retried with exponential backoff, any other API error propagates to the
    caller. Returned vectors are L2-normalized.
    """

    def __init__(
        self,
        model: str = config.OPENAI_MODEL,
        dimension: int = config.OPENAI_EMBEDDING_DIM,
        batch_size: int = config.OPENAI_BATCH_SIZE,
        max_retries: int = 5,
        retry_delay: float = 2.0,
        api_key: Optional[str] = None,
        client: Optional[openai.OpenAI] = None
    ):
        """
        Args:
            model: Embedding model name
            dimension: Vector length requested from the API
            batch_size: Words per request
            max_retries: Attempts per batch when rate limited
            retry_delay: First backoff delay in seconds, doubled per retry
            api_key: API key (defaults to OPENAI_API_KEY from the environment/.env)
            client: Ready-made client, used as-is

        Raises:
            ValueError: If no client is given and no API key can be found
        """
        if client is None:
            api_key = api_key or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError(
                    "OpenAI API key not found. "
                    "Set OPENAI_API_KEY in a .env file or pass api_key."
                )
            client = openai.OpenAI(api_key=api_key)

        self.client = client
        self.model = model
        self._dimension = dimension
        self.batch_size = batch_size
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    @property
    def name(self) -> str:
        return f"openai_{self.model}"

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, texts: list[str]) -> np.ndarray:
        if not texts:
            return np.empty((0, self.dimension))

        rows: list[list[float]] = []
        starts = range(0, len(texts), self.batch_size)
        for n, start in enumerate(starts, 1):
            batch = texts[start:start + self.batch_size]
            if len(starts) > 1:
                logger.info(f"Embedding batch {n}/{len(starts)} ({len(batch)} words)...")
            rows.extend(self._request(batch))

        vectors = np.asarray(rows, dtype=np.float64)
        if vectors.shape != (len(texts), self.dimension):
            raise RuntimeError(
                f"{self.name} returned shape {vectors.shape}, "
                f"expected {(len(texts), self.dimension)}"
            )
        return self.normalize(vectors)

    def _request(self, batch: list[str]) -> list[list[float]]:
        """One embeddings call, retried while the API reports rate limiting."""
        delay = self.retry_delay
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.client.embeddings.create(
                    model=self.model,
                    input=batch,
                    dimensions=self.dimension
                )
            except openai.RateLimitError:
                if attempt == self.max_retries:
                    raise
                logger.warning(f"Rate limited (attempt {attempt}/{self.max_retries}), retrying in {delay:.0f}s")
                time.sleep(delay)
                delay *= 2
            else:
                return [item.embedding for item in sorted(response.data, key=lambda item: item.index)]

        raise RuntimeError(f"No embeddings after {self.max_retries} attempts")
