"""
NRC Emotion Module

Counts word-emotion associations from an NRC-style emotion lexicon. Unlike
the polarity scorer there are no context rules: each known token adds 1.0 to
every category it is associated with.
"""

from typing import Dict, Iterable, List, Sequence

from .lexicon_store import EMOTION_CATEGORIES, EMOTION_DIMENSIONS, EmotionLexicon


def empty_scores() -> List[float]:
    return [0.0] * EMOTION_DIMENSIONS


class EmotionScorer:
    """Per-category association counter over an EmotionLexicon."""

    def __init__(self, lexicon: EmotionLexicon):
        self.lexicon = lexicon

    def score_words(self, words: Iterable[str]) -> List[float]:
        """
        Count category associations for a token list.

        Args:
            words: Tokens, normally from tokenize_alnum_words

        Returns:
            Ten counts in EMOTION_CATEGORIES order
        """
        scores = empty_scores()
        for word in words:
            if not word:
                continue
            mask = self.lexicon.get(word.lower())
            if not mask:
                continue
            for index in range(EMOTION_DIMENSIONS):
                if mask & (1 << index):
                    scores[index] += 1.0
        return scores


def emotion_scores(lexicon: EmotionLexicon, words: Iterable[str]) -> List[float]:
    """Score a token list against a lexicon without keeping a scorer around."""
    return EmotionScorer(lexicon).score_words(words)


def emotion_scores_to_dict(scores: Sequence[float]) -> Dict[str, float]:
    """Name each slot of a score list by its category."""
    return dict(zip(EMOTION_CATEGORIES, scores))


def tagged_token_count(scores: Sequence[float]) -> int:
    # Sums flags, so a word tagged with three categories counts three times
    return int(sum(scores))
