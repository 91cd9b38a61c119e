"""
Lexicon Store Module

Loads the polarity (VADER-style) and emotion (NRC-style) lexicons from their
plain-text resource files. Both stores are read-only after loading and keyed
by lowercase word, so a single instance can be shared by any number of
scoring threads.
"""

import logging
import math
from types import MappingProxyType
from collections.abc import Mapping
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


# Fixed order used by scores, summaries and DataFrame columns
EMOTION_CATEGORIES: Tuple[str, ...] = (
    "anger",
    "anticipation",
    "disgust",
    "fear",
    "joy",
    "sadness",
    "surprise",
    "trust",
    "negative",
    "positive",
)

EMOTION_DIMENSIONS = len(EMOTION_CATEGORIES)

_CATEGORY_INDEX = {name: index for index, name in enumerate(EMOTION_CATEGORIES)}


class LexiconLoadError(RuntimeError):
    """Raised when a lexicon file is missing, unreadable or has no usable entries."""


class PolarityLexicon(Mapping):
    """Immutable mapping of lowercase word to valence score."""

    def __init__(self, scores: Optional[Mapping[str, float]] = None):
        self._scores = MappingProxyType(
            {word.lower(): float(score) for word, score in (scores or {}).items()}
        )

    def __getitem__(self, word: str) -> float:
        return self._scores[word.lower()]

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and word.lower() in self._scores

    def __iter__(self) -> Iterator[str]:
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def get(self, word: str, default: Optional[float] = None) -> Optional[float]:
        return self._scores.get(word.lower(), default)

    def __repr__(self) -> str:
        return f"PolarityLexicon({len(self)} words)"


class EmotionLexicon(Mapping):
    """
    Immutable mapping of lowercase word to a 10-bit category mask.

    Bit k is set when the word is associated with EMOTION_CATEGORIES[k].
    A word that is absent has no association at all.
    """

    def __init__(self, masks: Optional[Mapping[str, int]] = None):
        self._masks = MappingProxyType(
            {word.lower(): int(mask) for word, mask in (masks or {}).items()}
        )

    def __getitem__(self, word: str) -> int:
        return self._masks[word.lower()]

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and word.lower() in self._masks

    def __iter__(self) -> Iterator[str]:
        return iter(self._masks)

    def __len__(self) -> int:
        return len(self._masks)

    def get(self, word: str, default: Optional[int] = None) -> Optional[int]:
        return self._masks.get(word.lower(), default)

    def categories_for(self, word: str) -> Tuple[str, ...]:
        """Return the category names associated with a word, in category order."""
        mask = self.get(word, 0)
        return tuple(
            name for index, name in enumerate(EMOTION_CATEGORIES) if mask & (1 << index)
        )

    def __repr__(self) -> str:
        return f"EmotionLexicon({len(self)} words)"


def _read_lines(path: str, kind: str) -> list:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as file:
            return file.read().splitlines()
    except OSError as e:
        logger.error(f"Failed to open {kind} lexicon: {path}")
        raise LexiconLoadError(f"Could not open {kind} lexicon file: {path}") from e


def _parse_flag(flag_field: str) -> int:
    parts = flag_field.split()
    if not parts:
        return 0
    try:
        return int(parts[0])
    except ValueError:
        return 0


def load_polarity_lexicon(path: str) -> PolarityLexicon:
    """
    Load a VADER-style lexicon file.

    Each line holds a word and its score separated by whitespace; any further
    fields (standard deviation, raw ratings) are ignored. Lines without a word
    and a finite numeric score are skipped.

    Args:
        path: Path to the lexicon file

    Returns:
        PolarityLexicon with lowercase keys

    Raises:
        LexiconLoadError: If the file cannot be read or yields no entries
    """
    scores: Dict[str, float] = {}

    for line in _read_lines(path, "polarity"):
        fields = line.split()
        if len(fields) < 2:
            continue
        try:
            score = float(fields[1])
        except ValueError:
            continue
        if not math.isfinite(score):
            continue
        scores[fields[0].lower()] = score

    if not scores:
        logger.error(f"Polarity lexicon has no usable entries: {path}")
        raise LexiconLoadError(f"Loaded 0 entries from polarity lexicon: {path}")

    logger.info(f"Loaded polarity lexicon with {len(scores)} words from {path}")
    return PolarityLexicon(scores)


def load_emotion_lexicon(path: str) -> EmotionLexicon:
    """
    Load an NRC-style word-emotion association file.

    Lines look like ``word<TAB>category<TAB>0|1``. Only lines flagged 1 with
    one of the ten known categories are kept; a word collects one flag per
    line.

    Args:
        path: Path to the lexicon file

    Returns:
        EmotionLexicon with lowercase keys

    Raises:
        LexiconLoadError: If the file cannot be read or yields no entries
    """
    masks: Dict[str, int] = {}
    associations = 0

    for line in _read_lines(path, "emotion"):
        if not line:
            continue

        fields = line.split("\t", 2)
        if len(fields) < 3:
            continue

        word, category, flag_field = fields
        if _parse_flag(flag_field) != 1:
            continue

        index = _CATEGORY_INDEX.get(category.lower())
        if index is None:
            continue

        word = word.lower()
        masks[word] = masks.get(word, 0) | (1 << index)
        associations += 1

    if not masks:
        logger.error(f"Emotion lexicon has no usable entries: {path}")
        raise LexiconLoadError(f"Loaded 0 entries from emotion lexicon: {path}")

    logger.info(
        f"Loaded emotion lexicon with {len(masks)} words "
        f"({associations} associations) from {path}"
    )
    return EmotionLexicon(masks)
