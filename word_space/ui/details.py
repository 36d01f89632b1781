"""Selected word details panel components."""

import html
from typing import TYPE_CHECKING

import streamlit as st

import config

if TYPE_CHECKING:
    from word_space.core.word_space import WordSpace


def render_word_details(ws: "WordSpace") -> None:
    """Render the active word panel, or a getting-started guide when idle."""
    if ws.selection.is_active:
        render_word_card(ws)
        render_neighbors_list(ws)
    else:
        render_getting_started(ws)


def render_word_card(ws: "WordSpace") -> None:
    """Render the active word card."""
    word = ws.selection.active_word
    index = ws.store.index_of(word)

    source_badge = ""
    if ws.source_of(index) == config.SOURCE_ADDED:
        source_badge = " <span class='ws-source-added'>(added)</span>"

    st.markdown(f"""
    <div class="ws-card">
        <div class="ws-card-title">{html.escape(word)}{source_badge}</div>
        <div class="ws-card-meta">#{index} &middot; {ws.store.dimension} dimensions</div>
    </div>
    """, unsafe_allow_html=True)

    if st.button("Deselect", key=f"deselect_{word}"):
        ws.select(word)
        st.rerun()


def render_neighbors_list(ws: "WordSpace") -> None:
    """Render the nearest neighbors with their cosine distances."""
    st.markdown("### Nearest Words")

    neighbors = ws.neighbors()
    if not neighbors:
        st.caption("No other words yet.")
        return

    for word, index, distance in neighbors:
        col1, col2 = st.columns([4, 1])
        with col1:
            if st.button(word, key=f"neighbor_{index}", use_container_width=True):
                ws.select(word)
                st.rerun()
        with col2:
            label = f"{distance:.3f}" if distance != float("inf") else "n/a"
            st.markdown(f"<span class='ws-badge'>{label}</span>", unsafe_allow_html=True)


def render_getting_started(ws: "WordSpace") -> None:
    """Render getting started guide."""
    st.markdown(f"""
    ### Getting Started

    **Vocabulary:** {ws.n_words} words

    **Add:** Type a word in the sidebar; it is embedded, the layout is
    recomputed and the new word is selected

    **Select:** Pick a word from the sidebar to highlight its
    {config.DEFAULT_K_NEIGHBORS} nearest neighbors (cosine distance)

    **Deselect:** Select the active word again, or clear the selection

    Words with similar meanings end up close together in the 3D layout.
    """)
