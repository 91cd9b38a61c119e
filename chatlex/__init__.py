"""
Chat Sentiment Lexicon Package

Lexicon-based sentiment and emotion scoring for chat messages: a VADER-style
polarity analyzer, an NRC-style emotion counter, and per-sender aggregation
of normalized chat message streams.
"""

__version__ = "1.0.0"

from .lexicon_store import (
    EMOTION_CATEGORIES,
    EmotionLexicon,
    LexiconLoadError,
    PolarityLexicon,
    load_emotion_lexicon,
    load_polarity_lexicon,
)
from .tokenization import tokenize_alnum_words, tokenize_words_and_emoticons
from .text_normalization import normalize_contractions
from .vader_sentiment import PolarityAnalyzer, polarity_scores
from .nrc_emotion import EmotionScorer, emotion_scores
from .aggregation import (
    AnalysisContext,
    ChatMessage,
    accumulate_message,
    merge_contexts,
    new_context,
    summarize_users,
)
from .chat_analyzer import ChatSentimentAnalyzer

__all__ = [
    "EMOTION_CATEGORIES",
    "EmotionLexicon",
    "LexiconLoadError",
    "PolarityLexicon",
    "load_emotion_lexicon",
    "load_polarity_lexicon",
    "tokenize_alnum_words",
    "tokenize_words_and_emoticons",
    "normalize_contractions",
    "PolarityAnalyzer",
    "polarity_scores",
    "EmotionScorer",
    "emotion_scores",
    "AnalysisContext",
    "ChatMessage",
    "accumulate_message",
    "merge_contexts",
    "new_context",
    "summarize_users",
    "ChatSentimentAnalyzer",
]
