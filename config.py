"""
Word-Space Configuration
Central configuration for paths, defaults, and settings.
"""

import logging
import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = PROJECT_ROOT / "data"

# Seed vocabulary
VOCAB_PATH = DATA_DIR / "vocab.json"
DEFAULT_VOCAB_LOADER = "json"

# Embedding settings
DEFAULT_EMBEDDER = "openai"
OPENAI_MODEL = "text-embedding-3-small"
OPENAI_EMBEDDING_DIM = 1536
OPENAI_BATCH_SIZE = 2000  # Max texts per API call
FALLBACK_EMBEDDING_DIM = 100
MODEL_LOAD_TIMEOUT = 15.0  # Seconds to wait for the external model before falling back
MODEL_PROBE_TEXT = "hello"

# UMAP settings (3D layout)
UMAP_N_COMPONENTS = 3
UMAP_MAX_NEIGHBORS = 5
UMAP_SPREAD = 5.0
UMAP_MIN_DIST = 0.8
UMAP_METRIC = "cosine"
UMAP_INIT = "random"
UMAP_RANDOM_STATE = 42

# Search settings
DEFAULT_K_NEIGHBORS = 5

# Visualization settings
PLOT_HEIGHT = 700
PLOT_WIDTH = 900

# Source identifiers for vocabulary entries
SOURCE_SEED = "seed"
SOURCE_ADDED = "added"

# Logging
LOG_LEVEL = getattr(logging, os.getenv("WORD_SPACE_LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FILE = os.getenv("WORD_SPACE_LOG_FILE")
