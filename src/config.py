"""Project paths and runtime defaults.

Values marked *env* can be overridden through environment variables.
"""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
CORPUS_FILE_NAME = "sample_corpus.csv"

# env: TEXT_SEARCH_CORPUS
CORPUS_FILE_PATH = Path(
    os.environ.get("TEXT_SEARCH_CORPUS", str(DATA_DIR / CORPUS_FILE_NAME))
)
TEXT_COLUMN = "text"

# env: TEXT_SEARCH_TOP_N
DEFAULT_TOP_N = int(os.environ.get("TEXT_SEARCH_TOP_N", "5"))

# Scores are printed with this many decimals; the core never rounds.
SCORE_DECIMALS = 4

# env: TEXT_SEARCH_LOG_LEVEL
LOG_LEVEL = os.environ.get("TEXT_SEARCH_LOG_LEVEL", "WARNING").upper()
