"""
Configuration Module

Runtime settings read from the environment (and a local .env file).
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from vaderSentiment import vaderSentiment as _vader_package

load_dotenv()

# The vaderSentiment distribution ships its lexicon next to the module
BUNDLED_VADER_LEXICON = str(Path(_vader_package.__file__).resolve().parent / "vader_lexicon.txt")

DEFAULT_EMOTION_LEXICON = "nrc_emotion_lexicon.txt"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Lexicon locations and analysis defaults."""

    polarity_lexicon_path: str = field(
        default_factory=lambda: os.getenv("CHATLEX_POLARITY_LEXICON", BUNDLED_VADER_LEXICON)
    )
    emotion_lexicon_path: str = field(
        default_factory=lambda: os.getenv("CHATLEX_EMOTION_LEXICON", DEFAULT_EMOTION_LEXICON)
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("CHATLEX_LOG_LEVEL", "INFO").upper()
    )
    max_workers: int = field(
        default_factory=lambda: int(os.getenv("CHATLEX_MAX_WORKERS", "4"))
    )
    top_words: int = field(
        default_factory=lambda: int(os.getenv("CHATLEX_TOP_WORDS", "10"))
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Set up root logging once, at the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
