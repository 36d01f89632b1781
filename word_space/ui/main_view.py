"""Main view UI components (messages, visualization, loading)."""

import logging
from typing import TYPE_CHECKING

import streamlit as st

from word_space.ui.state import AppState
from word_space.ui.styles import render_error, render_info
from word_space.visualization.scatter import ScatterPlotBuilder

if TYPE_CHECKING:
    from word_space.core.word_space import WordSpace

logger = logging.getLogger(__name__)


def render_messages() -> None:
    """Render the pending error or success message."""
    if AppState.has_error():
        render_error(st.session_state.last_error)
        AppState.clear_error()
        return

    message = AppState.pop_message()
    if message:
        render_info(message)


def render_visualization(ws: "WordSpace") -> None:
    """Render the 3D word scatter plot."""
    if not ws.has_layout:
        if ws.n_words < 2:
            st.info("Add at least two words to see the 3D layout.")
        else:
            st.info("The 3D layout is unavailable; it is recomputed when the next word is added.")
        return

    builder = ScatterPlotBuilder(show_labels=st.session_state.get("show_labels", True))
    fig = builder.build(ws.to_frame())
    st.plotly_chart(fig, use_container_width=True, key="word_space_plot")

    st.toggle("Show labels", key="show_labels")


def render_loading_screen(ws: "WordSpace") -> None:
    """Render the seed vocabulary loading screen."""
    st.markdown("### Building Word Space")
    st.markdown("""
    Loading the embedding model and embedding the seed vocabulary.
    If the model cannot be reached, deterministic fallback vectors are used.
    """)

    progress_bar = st.progress(0)
    status_text = st.empty()

    def update_progress(msg: str):
        status_text.text(msg)
        if "/" in msg:
            try:
                counts = next(p for p in msg.split() if "/" in p)
                current, total = (int(n) for n in counts.split("/"))
                progress_bar.progress(min(current / total, 1.0))
            except (StopIteration, ValueError, ZeroDivisionError):
                pass

    try:
        ws.initialize(progress_callback=update_progress)
    except Exception as e:
        logger.exception("Initialization failed")
        st.error(f"Error during initialization: {e}")
        st.exception(e)
        st.stop()

    progress_bar.progress(1.0)
    status_text.text("Done! Refreshing...")
    st.rerun()
