"""Tests for the selection state machine."""

import pytest

from word_space.core.errors import WordNotFoundError
from word_space.core.selection import IDLE, SelectionController


@pytest.fixture
def controller(animal_store):
    return SelectionController(animal_store, k=2)


class TestSelectionController:

    def test_starts_idle(self, controller):
        assert controller.state is IDLE
        assert not controller.is_active
        assert controller.highlighted_indices() == set()

    def test_select_activates_with_neighbors(self, controller):
        state = controller.select("cat")

        assert state.active_word == "cat"
        assert state.neighbor_indices == (1, 2)
        assert controller.highlighted_indices() == {0, 1, 2}

    def test_select_same_word_toggles_off(self, controller):
        controller.select("cat")
        assert controller.select("CAT") is IDLE
        assert not controller.is_active

    def test_select_other_word_switches(self, controller):
        controller.select("cat")
        state = controller.select("fish")

        assert state.active_word == "fish"
        assert 2 not in state.neighbor_indices

    def test_clear(self, controller):
        controller.select("dog")
        assert controller.clear() is IDLE
        assert controller.clear() is IDLE

    def test_unknown_word_leaves_state(self, controller):
        controller.select("cat")
        before = controller.state

        with pytest.raises(WordNotFoundError):
            controller.select("ghost")
        assert controller.state is before

    def test_word_added_always_activates(self, controller, animal_store):
        animal_store.append("kitten", [1.0, 0.01, 0.0])
        controller.select("kitten")

        # a second notification does not toggle off
        state = controller.word_added("kitten")
        assert state.active_word == "kitten"
        assert state.neighbor_indices == (0, 1)

    def test_refresh_picks_up_new_words(self, controller, animal_store):
        controller.select("cat")
        animal_store.append("kitten", [1.0, 0.01, 0.0])

        assert controller.neighbor_indices == (1, 2)
        assert controller.refresh().neighbor_indices == (3, 1)

    def test_refresh_when_idle(self, controller):
        assert controller.refresh() is IDLE

    def test_active_word_keeps_display_form(self, animal_store):
        animal_store.append("Paris", [0.0, 0.0, 1.0])
        controller = SelectionController(animal_store, k=1)

        assert controller.select("paris").active_word == "Paris"

    def test_k_larger_than_store(self, animal_store):
        controller = SelectionController(animal_store, k=10)
        assert controller.select("dog").neighbor_indices == (0, 2)
