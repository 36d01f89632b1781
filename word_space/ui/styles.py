"""
Look and feel of the Word-Space app.
Colors match the 3D scatter so the panels and the plot read as one scene.
"""

import html
from dataclasses import dataclass

import streamlit as st

from word_space.visualization.scatter import ScatterPlotBuilder


@dataclass(frozen=True)
class Theme:
    """Colors used by the injected CSS."""
    accent: str = "#6366f1"
    accent_soft: str = "rgba(99, 102, 241, 0.15)"
    scene: str = "#0d1117"
    panel: str = "#111827"
    text: str = "#e2e8f0"
    muted: str = "#94a3b8"
    active: str = ScatterPlotBuilder.COLORS["active"]
    neighbor: str = ScatterPlotBuilder.COLORS["neighbor"]
    added: str = ScatterPlotBuilder.COLORS["added"]
    error: str = "#f87171"


THEME = Theme()

_MONO = "'JetBrains Mono', 'Fira Code', monospace"


def _message_box(css_class: str, color: str) -> str:
    return f"""
    .{css_class} {{
        border-left: 3px solid {color};
        background: {THEME.panel};
        color: {THEME.text};
        padding: 0.6rem 0.9rem;
        margin: 0.5rem 0;
    }}"""


def get_css() -> str:
    """CSS for the app shell, the word card, badges and message boxes."""
    return f"""
<style>
    [data-testid="stAppViewContainer"] {{ background: {THEME.scene}; }}
    [data-testid="stSidebar"] {{ background: {THEME.panel}; }}

    .ws-header {{
        font-family: {_MONO};
        color: {THEME.accent};
        font-size: 2.2rem;
        margin-bottom: 0;
    }}
    .ws-subheader {{ color: {THEME.muted}; margin-top: 0; }}

    .ws-card {{
        border: 1px solid {THEME.accent};
        border-radius: 10px;
        background: {THEME.accent_soft};
        padding: 1rem 1.25rem;
        margin-bottom: 1rem;
    }}
    .ws-card-title {{ color: {THEME.active}; font-size: 1.5rem; font-weight: 700; }}
    .ws-card-meta {{ color: {THEME.muted}; font-size: 0.8rem; }}
    .ws-source-added {{ color: {THEME.added}; font-size: 0.9rem; }}

    .ws-badge {{
        font-family: {_MONO};
        color: {THEME.neighbor};
        font-size: 0.8rem;
    }}
    .ws-status {{ font-family: {_MONO}; color: {THEME.muted}; font-size: 0.8rem; }}
    {_message_box("ws-error", THEME.error)}
    {_message_box("ws-info", THEME.accent)}
</style>
"""


def inject_styles() -> None:
    st.markdown(get_css(), unsafe_allow_html=True)


def render_header() -> None:
    st.markdown('<h1 class="ws-header">Word-Space</h1>', unsafe_allow_html=True)
    st.markdown('<p class="ws-subheader">3D Word Embeddings</p>', unsafe_allow_html=True)


def render_error(message: str) -> None:
    """Show `message` (escaped) in the error box."""
    st.markdown(f'<div class="ws-error">{html.escape(message)}</div>', unsafe_allow_html=True)


def render_info(message: str) -> None:
    """Show `message` (escaped) in the info box."""
    st.markdown(f'<div class="ws-info">{html.escape(message)}</div>', unsafe_allow_html=True)
