"""
Centralized session state management for Word-Space.
Provides typed accessors and clear state transition methods.
"""

from dataclasses import dataclass
from typing import Any, Optional

import streamlit as st


@dataclass
class StateDefaults:
    """Default values for all session state variables."""
    word_space: Optional[Any] = None
    last_error: Optional[str] = None
    last_message: Optional[str] = None
    show_labels: bool = True


class AppState:
    """
    Wrapper around Streamlit session state with type hints and defaults.

    The WordSpace object owns vocabulary, layout and selection; this class
    only keeps it alive across reruns plus transient UI messages.
    """

    @classmethod
    def init(cls) -> None:
        """Initialize all session state with defaults."""
        defaults = StateDefaults()
        for field_name in defaults.__dataclass_fields__:
            if field_name not in st.session_state:
                st.session_state[field_name] = getattr(defaults, field_name)

    @classmethod
    def reset_session(cls) -> None:
        """Drop the current WordSpace so the next run starts from the seed vocabulary."""
        defaults = StateDefaults()
        for field_name in ("word_space", "last_error", "last_message"):
            st.session_state[field_name] = getattr(defaults, field_name)

    @classmethod
    def set_error(cls, message: str) -> None:
        """Record an error for display."""
        st.session_state.last_error = message
        st.session_state.last_message = None

    @classmethod
    def clear_error(cls) -> None:
        """Clear any recorded error."""
        st.session_state.last_error = None

    @classmethod
    def set_message(cls, message: str) -> None:
        """Record a success/info message for display."""
        st.session_state.last_message = message
        st.session_state.last_error = None

    @classmethod
    def pop_message(cls) -> Optional[str]:
        """Return and clear the pending message."""
        message = st.session_state.get("last_message")
        st.session_state.last_message = None
        return message

    @staticmethod
    def has_error() -> bool:
        """Check if there's an error to display."""
        return st.session_state.get("last_error") is not None


def init_session_state() -> None:
    """Convenience function to initialize session state."""
    AppState.init()
