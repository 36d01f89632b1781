"""
Error types raised by the Word-Space core.

Each error also derives from the builtin it specializes, so callers that only
care about "bad value" or "missing key" can keep catching ValueError or
LookupError.
"""


class WordSpaceError(Exception):
    """Base class for all Word-Space errors."""


class ValidationError(WordSpaceError, ValueError):
    """User input (a word or a vector) is malformed."""


class DuplicateWordError(WordSpaceError, ValueError):
    """The word is already in the store (case-insensitive)."""

    def __init__(self, word: str):
        super().__init__(f"Word already exists: {word!r}")
        self.word = word


class DimensionMismatchError(WordSpaceError, ValueError):
    """A vector does not match the store's established dimensionality."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Vector has {actual} dimensions, store expects {expected}"
        )
        self.expected = expected
        self.actual = actual


class WordNotFoundError(WordSpaceError, LookupError):
    """The word is not in the store."""

    def __init__(self, word: str):
        super().__init__(f"Word not found: {word!r}")
        self.word = word


class ProviderUnavailableError(WordSpaceError, RuntimeError):
    """The external embedding model failed to load or errored."""


class ProjectionPreconditionError(WordSpaceError, ValueError):
    """The projection cannot run on the given input (e.g. fewer than 2 vectors)."""


class ProjectionFailedError(WordSpaceError, RuntimeError):
    """The projection backend raised; the vocabulary is kept but no layout exists."""
