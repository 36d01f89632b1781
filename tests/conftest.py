"""Shared fixtures for Word-Space tests."""

import threading
from typing import Optional

import numpy as np
import pytest

from word_space.core.projector import UMAPProjector
from word_space.core.provider import EmbeddingProvider, ExternalModel
from word_space.core.vector_store import VectorStore
from word_space.embedders.base import BaseEmbedder
from word_space.loaders.base import BaseVocabularyLoader


class FakeReducer:
    """Stands in for umap.UMAP: records its params, returns a cheap layout."""

    instances: list["FakeReducer"] = []

    def __init__(self, **params):
        self.params = params
        FakeReducer.instances.append(self)

    def fit_transform(self, X):
        X = np.asarray(X)
        n_components = self.params.get("n_components", 3)
        coords = np.zeros((len(X), n_components))
        width = min(n_components, X.shape[1])
        coords[:, :width] = X[:, :width]
        coords[:, 0] += np.arange(len(X))
        return coords


class LetterCountEmbedder(BaseEmbedder):
    """Deterministic 26-d 'external model': letter frequency vectors."""

    def __init__(self, fail_after: Optional[int] = None):
        self.calls = 0
        self.fail_after = fail_after

    @property
    def name(self) -> str:
        return "letter_counts"

    @property
    def dimension(self) -> int:
        return 26

    def embed(self, texts: list[str]) -> np.ndarray:
        self.calls += 1
        if self.fail_after is not None and self.calls > self.fail_after:
            raise ConnectionError("model went away")
        rows = []
        for text in texts:
            row = np.zeros(26)
            for ch in text.lower():
                row[ord(ch) - ord("a")] += 1
            rows.append(row)
        return np.vstack(rows)


class ListVocabularyLoader(BaseVocabularyLoader):
    """In-memory seed vocabulary."""

    def __init__(self, words: list):
        self._words = words

    @property
    def name(self) -> str:
        return "list"

    def load(self) -> list[str]:
        return self.validate(self._words)


def failing_factory():
    raise ValueError("OpenAI API key not found.")


def wait_loaded(model: ExternalModel, timeout: float = 5.0):
    model.start_loading()
    return model.wait(timeout)


@pytest.fixture(autouse=True)
def _reset_fake_reducers():
    FakeReducer.instances.clear()
    yield
    FakeReducer.instances.clear()


@pytest.fixture
def fake_projector():
    return UMAPProjector(reducer_factory=FakeReducer)


@pytest.fixture
def animal_store():
    store = VectorStore()
    store.append("cat", [1.0, 0.0, 0.0])
    store.append("dog", [0.9, 0.1, 0.0])
    store.append("fish", [0.0, 1.0, 0.0])
    return store


@pytest.fixture
def fallback_provider():
    return EmbeddingProvider(external=None)


@pytest.fixture
def failed_model():
    model = ExternalModel(factory=failing_factory)
    wait_loaded(model)
    return model


@pytest.fixture
def ready_model():
    model = ExternalModel(factory=LetterCountEmbedder)
    wait_loaded(model)
    return model


@pytest.fixture
def gated_model():
    """External model whose load blocks until the returned gate is set."""
    gate = threading.Event()

    def factory():
        gate.wait(5)
        return LetterCountEmbedder()

    model = ExternalModel(factory=factory)
    yield model, gate
    gate.set()
