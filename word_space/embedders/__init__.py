"""
Embedding backends for Word-Space.
"""

from .base import BaseEmbedder, get_embedder, list_embedders, register_embedder
from .fallback import DeterministicEmbedder
from .openai_embedder import OpenAIEmbedder

__all__ = [
    "BaseEmbedder",
    "DeterministicEmbedder",
    "OpenAIEmbedder",
    "get_embedder",
    "list_embedders",
    "register_embedder",
]
