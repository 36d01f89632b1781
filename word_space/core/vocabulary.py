"""
Word validation shared by the store, the loaders and the UI.
"""

import re

from word_space.core.errors import ValidationError

WORD_PATTERN = re.compile(r"^[A-Za-z]+$")


def validate_word(text: str) -> str:
    """
    Validate user input as a Word.

    Surrounding whitespace is stripped; the original case is kept because it
    is the display form of the word.

    Args:
        text: Raw user input

    Returns:
        The stripped word

    Raises:
        ValidationError: If the input is empty or contains non-letters
    """
    if not isinstance(text, str):
        raise ValidationError(f"Expected a string, got {type(text).__name__}")

    word = text.strip()
    if not word:
        raise ValidationError("Please enter a word.")
    if not WORD_PATTERN.match(word):
        raise ValidationError(f"Only letters are allowed: {word!r}")
    return word


def word_key(word: str) -> str:
    """Case-insensitive identity key for a word."""
    return word.lower()
