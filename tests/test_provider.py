"""Tests for the external model lifecycle and variant dispatch."""

import threading

import numpy as np
import pytest

from word_space.core.errors import ProviderUnavailableError
from word_space.core.provider import (
    EmbeddingProvider,
    EmbeddingVariant,
    ExternalModel,
    ModelStatus,
)
from word_space.embedders.fallback import DeterministicEmbedder

from conftest import LetterCountEmbedder, failing_factory, wait_loaded


class TestExternalModel:

    def test_load_success(self, ready_model):
        assert ready_model.status is ModelStatus.READY
        assert ready_model.dimension == 26
        assert ready_model.error is None

    def test_load_failure_is_terminal(self, failed_model):
        assert failed_model.status is ModelStatus.UNAVAILABLE
        assert isinstance(failed_model.error, ValueError)

        assert failed_model.start_loading() is False
        assert failed_model.status is ModelStatus.UNAVAILABLE

        with pytest.raises(ProviderUnavailableError):
            failed_model.embed("tree")

    def test_loads_only_once(self):
        calls = []
        lock = threading.Lock()

        def factory():
            with lock:
                calls.append(1)
            return LetterCountEmbedder()

        model = ExternalModel(factory=factory)
        threads = [threading.Thread(target=model.start_loading) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert model.wait(5) is ModelStatus.READY
        assert model.start_loading() is False
        assert len(calls) == 1

    def test_status_while_loading(self, gated_model):
        model, gate = gated_model
        assert model.status is ModelStatus.NOT_LOADED

        assert model.start_loading() is True
        assert model.status is ModelStatus.LOADING
        assert model.wait(0.05) is ModelStatus.LOADING

        gate.set()
        assert model.wait(5) is ModelStatus.READY

    def test_wait_without_start_returns_immediately(self):
        model = ExternalModel(factory=LetterCountEmbedder)
        assert model.wait(10) is ModelStatus.NOT_LOADED

    def test_runtime_failure_marks_unavailable(self):
        model = ExternalModel(factory=lambda: LetterCountEmbedder(fail_after=2))
        assert wait_loaded(model) is ModelStatus.READY  # probe is call 1

        np.testing.assert_array_equal(model.embed("ab")[:3], [1, 1, 0])
        with pytest.raises(ProviderUnavailableError):
            model.embed("cd")

        assert model.status is ModelStatus.UNAVAILABLE
        assert isinstance(model.error, ConnectionError)


class TestEmbeddingProvider:

    def test_fallback_only(self, fallback_provider):
        embedding = fallback_provider.embed("Tree")

        assert embedding.variant is EmbeddingVariant.FALLBACK
        assert fallback_provider.model_status is ModelStatus.UNAVAILABLE
        np.testing.assert_array_equal(
            embedding.vector, DeterministicEmbedder().embed_single("tree")
        )

    def test_prefers_ready_external(self, ready_model):
        provider = EmbeddingProvider(external=ready_model)

        assert provider.active_variant is EmbeddingVariant.EXTERNAL
        embedding = provider.embed("Tree")
        assert embedding.variant is EmbeddingVariant.EXTERNAL
        assert embedding.vector.shape == (26,)
        assert embedding.vector[ord("t") - ord("a")] == 1

    def test_failed_load_falls_back(self, failed_model):
        provider = EmbeddingProvider(external=failed_model)

        assert provider.active_variant is EmbeddingVariant.FALLBACK
        embedding = provider.embed("tree")
        assert embedding.variant is EmbeddingVariant.FALLBACK
        assert embedding.vector.shape == (100,)

    def test_runtime_failure_falls_back_permanently(self):
        model = ExternalModel(factory=lambda: LetterCountEmbedder(fail_after=1))
        wait_loaded(model)
        provider = EmbeddingProvider(external=model)

        assert provider.embed("tree").variant is EmbeddingVariant.FALLBACK
        assert provider.active_variant is EmbeddingVariant.FALLBACK
        assert provider.embed("leaf").variant is EmbeddingVariant.FALLBACK

    def test_require_fallback_skips_external(self, ready_model):
        provider = EmbeddingProvider(external=ready_model)
        embedding = provider.embed("tree", require=EmbeddingVariant.FALLBACK)
        assert embedding.variant is EmbeddingVariant.FALLBACK

    def test_loading_model_without_wait_uses_fallback(self, gated_model):
        model, _ = gated_model
        provider = EmbeddingProvider(external=model)
        provider.start()

        embedding = provider.embed("tree", wait=False)
        assert embedding.variant is EmbeddingVariant.FALLBACK

    def test_waits_for_loading_model(self, gated_model):
        model, gate = gated_model
        provider = EmbeddingProvider(external=model, load_timeout=5)
        provider.start()

        threading.Timer(0.05, gate.set).start()
        assert provider.embed("tree").variant is EmbeddingVariant.EXTERNAL

    def test_load_timeout_falls_back(self, gated_model):
        model, _ = gated_model
        provider = EmbeddingProvider(external=model, load_timeout=0.01)
        provider.start()

        assert provider.embed("tree").variant is EmbeddingVariant.FALLBACK
        assert model.status is ModelStatus.LOADING

    def test_dimension_for(self, ready_model):
        provider = EmbeddingProvider(external=ready_model)
        assert provider.dimension_for(EmbeddingVariant.EXTERNAL) == 26
        assert provider.dimension_for(EmbeddingVariant.FALLBACK) == 100

    def test_factory_error_does_not_escape(self):
        model = ExternalModel(factory=failing_factory)
        provider = EmbeddingProvider(external=model, load_timeout=5)
        provider.start()

        assert provider.embed("tree").variant is EmbeddingVariant.FALLBACK
        assert model.status is ModelStatus.UNAVAILABLE
