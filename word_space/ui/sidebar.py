"""Sidebar UI components for Word-Space."""

import logging
from typing import TYPE_CHECKING

import streamlit as st

from word_space.core.errors import WordSpaceError
from word_space.core.provider import ModelStatus
from word_space.ui.state import AppState

if TYPE_CHECKING:
    from word_space.core.word_space import WordSpace

logger = logging.getLogger(__name__)

NO_SELECTION = "-- Select a word --"

STATUS_LABELS = {
    ModelStatus.NOT_LOADED: "not loaded",
    ModelStatus.LOADING: "loading...",
    ModelStatus.READY: "ready",
    ModelStatus.UNAVAILABLE: "unavailable (using fallback)",
}


def render_sidebar(ws: "WordSpace") -> None:
    """Render the complete sidebar."""
    with st.sidebar:
        render_add_word(ws)
        st.markdown("---")
        render_browse_words(ws)
        st.markdown("---")
        render_vocabulary_info(ws)
        st.markdown("---")
        render_session_controls()


def render_add_word(ws: "WordSpace") -> None:
    """Render the add-word form."""
    st.markdown("### Add a Word")

    with st.form("add_word_form", clear_on_submit=True):
        text = st.text_input(
            "New word",
            placeholder="Letters only, e.g. galaxy",
            label_visibility="collapsed"
        )
        submitted = st.form_submit_button("Add", type="primary", use_container_width=True)

    if submitted:
        _perform_add(ws, text)


def _perform_add(ws: "WordSpace", text: str) -> None:
    """Add a word and record the outcome for display."""
    try:
        with st.spinner("Embedding and re-projecting..."):
            index = ws.add_word(text)
    except WordSpaceError as e:
        AppState.set_error(str(e))
    except Exception as e:
        logger.exception("Adding word failed")
        AppState.set_error(f"Adding word failed: {e}")
    else:
        AppState.set_message(f"Added '{ws.store.word_at(index)}'")
    st.rerun()


def render_browse_words(ws: "WordSpace") -> None:
    """Render word selector dropdown."""
    st.markdown("### Browse Words")

    options = [NO_SELECTION] + sorted(ws.store.words, key=str.lower)
    active = ws.selection.active_word

    selected = st.selectbox(
        "Select word:",
        options,
        index=options.index(active) if active in options else 0,
        key=f"word_selector_{active}"
    )

    if selected != NO_SELECTION and selected != active:
        ws.select(selected)
        st.rerun()

    if ws.selection.is_active and st.button("Clear selection", use_container_width=True):
        ws.clear_selection()
        st.rerun()


def render_vocabulary_info(ws: "WordSpace") -> None:
    """Render vocabulary and model info section."""
    st.markdown("### Vocabulary")
    st.markdown(f"**Words:** {ws.n_words:,}")
    if ws.n_added > 0:
        st.markdown(f"**Added this session:** {ws.n_added}")
    if ws.store.dimension is not None:
        st.markdown(f"**Dimensions:** {ws.store.dimension}")

    status = ws.provider.model_status
    variant = ws.variant.value if ws.variant is not None else ws.provider.active_variant.value
    st.markdown(
        f'<div class="ws-status">model: {STATUS_LABELS[status]}<br>'
        f'embeddings: {variant}</div>',
        unsafe_allow_html=True
    )


def render_session_controls() -> None:
    """Render session reset control."""
    if st.button("Reset Session", help="Start over from the seed vocabulary"):
        AppState.reset_session()
        st.rerun()
