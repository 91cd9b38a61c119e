"""
Text Normalization Module

Contraction expansion, case helpers and score normalization/rounding shared by the
polarity scorer, the emotion scorer and the aggregation layer.
"""

import math
from typing import List, Sequence, Tuple

from vaderSentiment.vaderSentiment import allcap_differential, normalize as normalize_score


# Applied in order; later entries see the output of earlier ones
CONTRACTIONS: Tuple[Tuple[str, str], ...] = (
    # negatives
    ("don't", "do not"),
    ("doesn't", "does not"),
    ("didn't", "did not"),
    ("can't", "can not"),
    ("cannot", "can not"),
    ("won't", "will not"),
    ("wouldn't", "would not"),
    ("shouldn't", "should not"),
    ("couldn't", "could not"),
    ("isn't", "is not"),
    ("aren't", "are not"),
    ("wasn't", "was not"),
    ("weren't", "were not"),
    ("ain't", "is not"),

    ("i'm", "i am"),
    ("im ", "i am "),
    ("you're", "you are"),
    ("youre", "you are"),
    ("we're", "we are"),
    ("they're", "they are"),
    ("it's", "it is"),
    ("thats", "that is"),
    ("that's", "that is"),
    ("there's", "there is"),
    ("what's", "what is"),
    ("who's", "who is"),
    ("let's", "let us"),

    ("i've", "i have"),
    ("you've", "you have"),
    ("we've", "we have"),
    ("they've", "they have"),

    ("i'd", "i would"),
    ("you'd", "you would"),
    ("he'd", "he would"),
    ("she'd", "she would"),
    ("they'd", "they would"),
    ("we'd", "we would"),

    ("i'll", "i will"),
    ("you'll", "you will"),
    ("he'll", "he will"),
    ("she'll", "she will"),
    ("they'll", "they will"),
    ("we'll", "we will"),

    ("would've", "would have"),
    ("could've", "could have"),
    ("should've", "should have"),
)

APOSTROPHES = ("’", "‘")


def normalize_contractions(text: str) -> str:
    """
    Lowercase text and expand common English contractions.

    Curly apostrophes are unified to ASCII first so that "don’t" and "don't"
    expand identically.

    Args:
        text: Raw message text

    Returns:
        Lowercased text with contractions expanded
    """
    normalized = str(text).lower()
    for apostrophe in APOSTROPHES:
        normalized = normalized.replace(apostrophe, "'")

    for contraction, expansion in CONTRACTIONS:
        normalized = normalized.replace(contraction, expansion)

    return normalized


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def round_half_away(value: float, digits: int) -> float:
    """
    Round to a fixed number of decimals, halves away from zero.

    Python's round() rounds halves to even, which shifts a handful of
    published scores by one unit in the last place.
    """
    factor = 10.0 ** digits
    rounded = math.floor(abs(value) * factor + 0.5) / factor
    return -rounded if value < 0 else rounded


def is_upper(word: str) -> bool:
    """True when the word has at least one letter and every letter is uppercase."""
    return word.isupper()


def to_lower_all(words: Sequence[str]) -> List[str]:
    """Lowercase every token in a sequence."""
    return [word.lower() for word in words]
