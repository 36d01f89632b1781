"""
Base class for vocabulary loaders.
Defines the interface all seed vocabulary loaders must implement.
"""

import logging
from abc import ABC, abstractmethod

from word_space.core.errors import ValidationError
from word_space.core.vocabulary import validate_word, word_key

logger = logging.getLogger(__name__)


class BaseVocabularyLoader(ABC):
    """
    Abstract base class for seed vocabulary loaders.

    All loaders return an ordered list of words. Order matters: it becomes
    the store index order of the seeded vocabulary.
    """

    @abstractmethod
    def load(self) -> list[str]:
        """
        Load and return the seed vocabulary.

        Returns:
            Ordered list of valid, unique words
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique name for this vocabulary source.

        Returns:
            String identifier for the vocabulary
        """
        pass

    def validate(self, words: list) -> list[str]:
        """
        Keep only valid, first-seen words, preserving order.

        Invalid entries and case-insensitive duplicates are dropped and
        counted in a warning.

        Args:
            words: Raw entries from the seed file

        Returns:
            Validated list of words
        """
        valid: list[str] = []
        seen: set[str] = set()
        invalid_count = 0
        duplicate_count = 0

        for raw in words:
            try:
                word = validate_word(raw)
            except ValidationError:
                invalid_count += 1
                continue

            key = word_key(word)
            if key in seen:
                duplicate_count += 1
                continue
            seen.add(key)
            valid.append(word)

        if invalid_count or duplicate_count:
            logger.warning(
                f"Dropped {invalid_count} invalid and {duplicate_count} duplicate "
                f"entries from {self.name} ({len(words)} total)"
            )

        logger.info(f"Validated vocabulary: {len(valid)} words (from {len(words)} entries)")

        return valid

    def _auto_detect_column(self, columns: list[str], candidates: list[str]) -> str:
        """
        Find the word column among `columns`.

        Exact matches win over case-insensitive ones.

        Raises:
            ValueError: If no candidate column exists
        """
        columns_lower = {c.lower(): c for c in columns}

        for candidate in candidates:
            if candidate in columns:
                return candidate
        for candidate in candidates:
            if candidate.lower() in columns_lower:
                return columns_lower[candidate.lower()]

        raise ValueError(
            f"Could not find a word column. Tried: {candidates}. Available: {list(columns)}"
        )


_LOADERS: dict[str, type[BaseVocabularyLoader]] = {}


def register_loader(name: str):
    """
    Class decorator adding a seed loader to the registry under `name`.

    Usage:
        @register_loader("json")
        class JsonVocabularyLoader(BaseVocabularyLoader):
            ...

    Raises:
        TypeError: If the class is not a BaseVocabularyLoader
        ValueError: If another loader already uses `name`
    """
    def decorator(cls: type[BaseVocabularyLoader]):
        if not issubclass(cls, BaseVocabularyLoader):
            raise TypeError(f"{cls.__name__} must inherit from BaseVocabularyLoader")
        if name in _LOADERS:
            raise ValueError(f"Loader '{name}' already registered by {_LOADERS[name].__name__}")
        _LOADERS[name] = cls
        return cls
    return decorator


def get_loader(name: str, **kwargs) -> BaseVocabularyLoader:
    """
    Build the seed loader registered as `name`.

    Args:
        name: Registry key, e.g. "json" or "csv"
        **kwargs: Forwarded to the loader constructor (path, max_items, ...)

    Raises:
        ValueError: If no loader is registered under `name`
    """
    try:
        cls = _LOADERS[name]
    except KeyError:
        raise ValueError(f"Unknown loader '{name}'. Available: {list_loaders()}") from None
    return cls(**kwargs)


def list_loaders() -> list[str]:
    """Registered loader names, in registration order."""
    return list(_LOADERS)
