"""Tests for the UMAP projection facade."""

import numpy as np
import pytest

from word_space.core.errors import ProjectionPreconditionError
from word_space.core.projector import UMAPProjector
from word_space.core.vector_store import VectorStore
from word_space.embedders.fallback import DeterministicEmbedder

from conftest import FakeReducer


class TestReducerParams:

    @pytest.mark.parametrize("n_samples, expected", [
        (3, 2),
        (4, 3),
        (6, 5),
        (50, 5),
    ])
    def test_neighbors_shrink_for_small_inputs(self, fake_projector, n_samples, expected):
        fake_projector.project(np.random.default_rng(0).normal(size=(n_samples, 4)))

        params = FakeReducer.instances[-1].params
        assert params["n_neighbors"] == expected

    def test_neighborhood_size(self):
        projector = UMAPProjector()
        assert projector.neighborhood_size(2) == 1
        assert projector.neighborhood_size(4) == 3
        assert projector.neighborhood_size(100) == 5

    def test_fixed_params(self, fake_projector):
        fake_projector.project(np.ones((10, 4)))

        params = FakeReducer.instances[-1].params
        assert params["n_components"] == 3
        assert params["spread"] == 5.0
        assert params["min_dist"] == 0.8
        assert params["metric"] == "cosine"

    def test_fresh_reducer_per_call(self, fake_projector):
        vectors = np.ones((5, 4))
        fake_projector.project(vectors)
        fake_projector.project(vectors)
        assert len(FakeReducer.instances) == 2


class TestProject:

    def test_row_order_follows_input(self, fake_projector):
        vectors = np.arange(12, dtype=float).reshape(4, 3)
        coords = fake_projector.project(vectors)

        assert coords.shape == (4, 3)
        np.testing.assert_array_equal(coords[:, 1], vectors[:, 1])

    @pytest.mark.parametrize("vectors", [np.empty((0, 3)), np.ones((1, 3))])
    def test_too_few_vectors(self, fake_projector, vectors):
        with pytest.raises(ProjectionPreconditionError):
            fake_projector.project(vectors)
        assert FakeReducer.instances == []

    def test_rejects_flat_input(self, fake_projector):
        with pytest.raises(ProjectionPreconditionError):
            fake_projector.project([1.0, 2.0, 3.0])

    def test_bad_reducer_output(self):
        class BrokenReducer(FakeReducer):
            def fit_transform(self, X):
                return np.zeros((len(X), 2))

        with pytest.raises(RuntimeError):
            UMAPProjector(reducer_factory=BrokenReducer).project(np.ones((4, 3)))

    def test_snapshot_version(self, fake_projector, animal_store):
        result = fake_projector.project_snapshot(animal_store.snapshot())

        assert result.version == 3
        assert len(result) == 3
        assert result.coords.shape == (3, 3)

    def test_two_words_are_laid_out_without_reducer(self, fake_projector):
        coords = fake_projector.project([[1.0, 0.0], [0.0, 1.0]])

        np.testing.assert_allclose(coords, [[-2.5, 0, 0], [2.5, 0, 0]])
        assert FakeReducer.instances == []

    def test_two_degenerate_words(self, fake_projector):
        coords = fake_projector.project([[0.0, 0.0], [1.0, 1.0]])
        np.testing.assert_allclose(coords[:, 0], [-2.5, 2.5])

    def test_two_words_with_real_umap(self):
        vectors = DeterministicEmbedder().embed(["cat", "dog"])
        coords = UMAPProjector().project(vectors)

        assert coords.shape == (2, 3)
        assert np.isfinite(coords).all()
        assert coords[0, 0] < coords[1, 0]

    def test_three_words_with_real_umap(self):
        vectors = DeterministicEmbedder().embed(["cat", "dog", "fish"])
        coords = UMAPProjector().project(vectors)

        assert coords.shape == (3, 3)
        assert np.isfinite(coords).all()

    def test_real_umap(self):
        words = [
            "king", "queen", "prince", "cat", "dog", "fish",
            "red", "green", "blue", "apple", "pear", "plum",
        ]
        embedder = DeterministicEmbedder()
        store = VectorStore()
        for word in words:
            store.append(word, embedder.embed_single(word))

        result = UMAPProjector().project_snapshot(store.snapshot())

        assert result.coords.shape == (12, 3)
        assert np.isfinite(result.coords).all()
        assert result.version == 12
