"""
CSV vocabulary loader.
Loads the seed vocabulary from one column of a CSV file.
"""

from pathlib import Path
from typing import Optional

import pandas as pd

from .base import BaseVocabularyLoader, register_loader


@register_loader("csv")
class CsvVocabularyLoader(BaseVocabularyLoader):
    """
    Loader for a CSV seed file.

    The word column is auto-detected (word, token, term, text, vocab) unless
    given explicitly. Empty cells are skipped.
    """

    WORD_COLUMN_CANDIDATES = ["word", "token", "term", "text", "vocab"]

    def __init__(
        self,
        path: Path,
        column: Optional[str] = None,
        max_items: Optional[int] = None
    ):
        """
        Args:
            path: Path to the CSV file
            column: Name of the word column (auto-detected if None)
            max_items: Optional limit on number of words to load
        """
        self.path = Path(path)
        self.column = column
        self.max_items = max_items

    @property
    def name(self) -> str:
        return f"csv:{self.path.name}"

    def load(self) -> list[str]:
        """
        Load the CSV seed file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If no word column can be found
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Vocabulary file not found at {self.path}")

        df = pd.read_csv(self.path, dtype=str, keep_default_na=False)

        column = self.column or self._auto_detect_column(
            list(df.columns), self.WORD_COLUMN_CANDIDATES
        )
        if column not in df.columns:
            raise ValueError(f"Column '{column}' not in {self.path}: {list(df.columns)}")

        raw = [w for w in df[column].tolist() if w.strip()]
        words = self.validate(raw)

        if self.max_items is not None:
            words = words[:self.max_items]

        return words
