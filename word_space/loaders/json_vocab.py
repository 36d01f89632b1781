"""
JSON vocabulary loader.
Loads the seed vocabulary from a JSON list of strings.
"""

import json
from pathlib import Path
from typing import Optional

from .base import BaseVocabularyLoader, register_loader
import config


@register_loader("json")
class JsonVocabularyLoader(BaseVocabularyLoader):
    """
    Loader for a JSON seed file.

    Expected format:
        ["king", "queen", "apple", ...]
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        max_items: Optional[int] = None
    ):
        """
        Args:
            path: Path to the JSON file (defaults to config.VOCAB_PATH)
            max_items: Optional limit on number of words to load
        """
        self.path = Path(path) if path else config.VOCAB_PATH
        self.max_items = max_items

    @property
    def name(self) -> str:
        return f"json:{self.path.name}"

    def load(self) -> list[str]:
        """
        Load the JSON seed file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a JSON list of strings
        """
        if not self.path.exists():
            raise FileNotFoundError(
                f"Vocabulary file not found at {self.path}\n"
                f"Create a JSON list of words, e.g. [\"king\", \"queen\"]"
            )

        with open(self.path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
            raise ValueError(f"{self.path} must contain a JSON list of strings")

        words = self.validate(data)

        if self.max_items is not None:
            words = words[:self.max_items]

        return words
