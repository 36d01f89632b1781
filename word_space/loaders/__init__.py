"""
Seed vocabulary loaders for Word-Space.
"""

from .base import BaseVocabularyLoader, get_loader, list_loaders, register_loader
from .json_vocab import JsonVocabularyLoader
from .csv_vocab import CsvVocabularyLoader

__all__ = [
    "BaseVocabularyLoader",
    "JsonVocabularyLoader",
    "CsvVocabularyLoader",
    "get_loader",
    "list_loaders",
    "register_loader",
]
