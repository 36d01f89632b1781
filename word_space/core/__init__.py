"""
Core components for Word-Space.
"""

from .errors import (
    DimensionMismatchError,
    DuplicateWordError,
    ProjectionFailedError,
    ProjectionPreconditionError,
    ProviderUnavailableError,
    ValidationError,
    WordNotFoundError,
    WordSpaceError,
)
from .vector_store import StoreSnapshot, VectorStore
from .similarity import SimilarityIndex, cosine_distance
from .provider import Embedding, EmbeddingProvider, EmbeddingVariant, ExternalModel, ModelStatus
from .projector import ProjectionResult, UMAPProjector
from .selection import SelectionController, SelectionState

__all__ = [
    "DimensionMismatchError",
    "DuplicateWordError",
    "Embedding",
    "EmbeddingProvider",
    "EmbeddingVariant",
    "ExternalModel",
    "ModelStatus",
    "ProjectionFailedError",
    "ProjectionPreconditionError",
    "ProjectionResult",
    "ProviderUnavailableError",
    "SelectionController",
    "SelectionState",
    "SimilarityIndex",
    "StoreSnapshot",
    "UMAPProjector",
    "ValidationError",
    "VectorStore",
    "WordNotFoundError",
    "WordSpaceError",
    "cosine_distance",
]
