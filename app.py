"""
Word-Space: 3D Word Embeddings
Main Streamlit application.

Run with: streamlit run app.py
"""

import os

import streamlit as st
from dotenv import load_dotenv

from word_space.core.provider import EmbeddingProvider, ExternalModel
from word_space.core.word_space import WordSpace
from word_space.embedders.base import get_embedder
from word_space.logging_config import setup_logging
from word_space.ui import details, main_view, sidebar
from word_space.ui.state import init_session_state
from word_space.ui.styles import inject_styles, render_header
import config


# -----------------------------------------------------------------------------
# Page Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Word-Space",
    page_icon="🌌",
    layout="wide",
    initial_sidebar_state="expanded"
)

load_dotenv()
setup_logging(config.LOG_LEVEL, config.LOG_FILE)
inject_styles()
init_session_state()


# -----------------------------------------------------------------------------
# Shared Resources
# -----------------------------------------------------------------------------

@st.cache_resource(show_spinner=False)
def get_external_model() -> ExternalModel:
    """
    Process-wide external embedding model.
    Cached so the model is loaded at most once, whatever the number of sessions.
    """
    model = ExternalModel(factory=lambda: get_embedder(config.DEFAULT_EMBEDDER))
    model.start_loading()
    return model


def get_word_space() -> WordSpace:
    """Get or create the WordSpace for this browser session."""
    if st.session_state.word_space is None:
        provider = EmbeddingProvider(external=get_external_model())
        st.session_state.word_space = WordSpace(provider=provider)
    return st.session_state.word_space


# -----------------------------------------------------------------------------
# Main Application
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    render_header()

    if not os.getenv("OPENAI_API_KEY"):
        st.caption(
            "OPENAI_API_KEY is not set: words are embedded with the deterministic "
            "fallback. Add the key to a `.env` file to use the OpenAI model."
        )

    ws = get_word_space()

    if not ws.is_initialized:
        main_view.render_loading_screen(ws)
        st.stop()

    sidebar.render_sidebar(ws)
    main_view.render_messages()

    col_viz, col_details = st.columns([3, 1])

    with col_viz:
        main_view.render_visualization(ws)

    with col_details:
        details.render_word_details(ws)


if __name__ == "__main__":
    main()
