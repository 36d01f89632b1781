"""
Embedder backends turn words into fixed-length vectors.
Backends register by name so the app can pick one from config.
"""

from abc import ABC, abstractmethod

import numpy as np


class BaseEmbedder(ABC):
    """
    Interface shared by every word embedding backend.

    A backend maps each word of a batch to one row of a (n, dimension)
    array. Row order follows input order, and every row has the length
    reported by `dimension`.
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> np.ndarray:
        """
        Embed a batch of words.

        Args:
            texts: Words to embed, already lowercased by the caller

        Returns:
            np.ndarray of shape (len(texts), dimension)
        """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this backend produces."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier shown in the UI and in log messages."""

    def embed_single(self, text: str) -> np.ndarray:
        """Embed one word; returns a vector of shape (dimension,)."""
        return self.embed([text])[0]

    @staticmethod
    def normalize(vectors: np.ndarray) -> np.ndarray:
        """
        Scale each row to unit L2 norm.

        All-zero rows are returned unchanged.
        """
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return vectors / norms


_EMBEDDERS: dict[str, type[BaseEmbedder]] = {}


def register_embedder(name: str):
    """
    Class decorator adding a backend to the registry under `name`.

    Usage:
        @register_embedder("fallback")
        class DeterministicEmbedder(BaseEmbedder):
            ...

    Raises:
        TypeError: If the class is not a BaseEmbedder
        ValueError: If another backend already uses `name`
    """
    def decorator(cls: type[BaseEmbedder]):
        if not issubclass(cls, BaseEmbedder):
            raise TypeError(f"{cls.__name__} must inherit from BaseEmbedder")
        if name in _EMBEDDERS:
            raise ValueError(f"Embedder '{name}' already registered by {_EMBEDDERS[name].__name__}")
        _EMBEDDERS[name] = cls
        return cls
    return decorator


def get_embedder(name: str, **kwargs) -> BaseEmbedder:
    """
    Build the backend registered as `name`.

    Args:
        name: Registry key, e.g. "openai" or "fallback"
        **kwargs: Forwarded to the backend constructor

    Raises:
        ValueError: If no backend is registered under `name`, or the
            backend rejects its configuration
    """
    try:
        cls = _EMBEDDERS[name]
    except KeyError:
        raise ValueError(f"Unknown embedder '{name}'. Available: {list_embedders()}") from None
    return cls(**kwargs)


def list_embedders() -> list[str]:
    """Registered backend names, in registration order."""
    return list(_EMBEDDERS)
