"""UI components for Word-Space Streamlit application."""

from .state import AppState, init_session_state
from .styles import inject_styles, render_header, THEME
from . import sidebar
from . import main_view
from . import details

__all__ = [
    "AppState",
    "init_session_state",
    "inject_styles",
    "render_header",
    "THEME",
    "sidebar",
    "main_view",
    "details",
]
