"""
NLP Analysis Module

Sentiment and emotion feature columns, tokenization and keyword extraction
for chat DataFrames.
"""

from collections import Counter
from typing import Dict, List, Optional
import logging

import pandas as pd

from .config import get_settings
from .lexicon_store import EMOTION_CATEGORIES, load_emotion_lexicon, load_polarity_lexicon
from .nrc_emotion import EmotionScorer, emotion_scores_to_dict
from .text_normalization import normalize_contractions
from .tokenization import STOP_WORDS, tokenize_alnum_words
from .vader_sentiment import PolarityAnalyzer

logger = logging.getLogger(__name__)


# Lexicons are loaded once and then shared read-only
_vader_analyzer = None
_emotion_scorer = None


def _get_vader_analyzer() -> PolarityAnalyzer:
    """Get or create the polarity analyzer from the configured lexicon."""
    global _vader_analyzer
    if _vader_analyzer is None:
        _vader_analyzer = PolarityAnalyzer(load_polarity_lexicon(get_settings().polarity_lexicon_path))
    return _vader_analyzer


def _get_emotion_scorer() -> EmotionScorer:
    """Get or create the emotion scorer from the configured lexicon."""
    global _emotion_scorer
    if _emotion_scorer is None:
        _emotion_scorer = EmotionScorer(load_emotion_lexicon(get_settings().emotion_lexicon_path))
    return _emotion_scorer


def analyze_sentiment_vader(
    message: str,
    analyzer: Optional[PolarityAnalyzer] = None
) -> Dict[str, float]:
    """
    Analyze sentiment of a single message.

    Args:
        message: Text message to analyze
        analyzer: Analyzer to use; the configured default when None

    Returns:
        Dictionary with sentiment scores: neg, neu, pos, compound
    """
    analyzer = analyzer or _get_vader_analyzer()
    return analyzer.polarity_scores(str(message))


def analyze_emotions(
    message: str,
    scorer: Optional[EmotionScorer] = None
) -> Dict[str, float]:
    """
    Count emotion associations of a single message.

    Args:
        message: Text message to analyze
        scorer: Scorer to use; the configured default when None

    Returns:
        Dictionary mapping each emotion category to its count
    """
    scorer = scorer or _get_emotion_scorer()
    words = tokenize_alnum_words(normalize_contractions(message))
    return emotion_scores_to_dict(scorer.score_words(words))


def sentiment_bucket(compound: float) -> float:
    """Positive (1), neutral (0.5) or negative (0) bucket of a compound score."""
    if compound >= 0.5:
        return 1
    if compound > -0.5:
        return 0.5
    return 0


def add_sentiment_features(
    df: pd.DataFrame,
    analyzer: Optional[PolarityAnalyzer] = None
) -> pd.DataFrame:
    """
    Add sentiment columns to DataFrame.

    Args:
        df: DataFrame with 'message' column
        analyzer: Analyzer to use; the configured default when None

    Returns:
        DataFrame with sentiment_compound, sentiment_pos, sentiment_neu,
        sentiment_neg and sentiment columns added
    """
    if df.empty or 'message' not in df.columns:
        return df

    df = df.copy()
    analyzer = analyzer or _get_vader_analyzer()

    sentiment_scores = df['message'].apply(lambda x: analyze_sentiment_vader(x, analyzer))
    df['sentiment_compound'] = sentiment_scores.apply(lambda x: x['compound'])
    df['sentiment_pos'] = sentiment_scores.apply(lambda x: x['pos'])
    df['sentiment_neu'] = sentiment_scores.apply(lambda x: x['neu'])
    df['sentiment_neg'] = sentiment_scores.apply(lambda x: x['neg'])

    df['sentiment'] = df['sentiment_compound'].apply(sentiment_bucket)

    return df


def add_emotion_features(
    df: pd.DataFrame,
    scorer: Optional[EmotionScorer] = None
) -> pd.DataFrame:
    """
    Add one emotion_<category> count column per NRC category.

    Args:
        df: DataFrame with 'message' column
        scorer: Scorer to use; the configured default when None

    Returns:
        DataFrame with emotion count columns added
    """
    if df.empty or 'message' not in df.columns:
        return df

    df = df.copy()
    scorer = scorer or _get_emotion_scorer()

    emotion_counts = df['message'].apply(lambda x: analyze_emotions(x, scorer))
    for category in EMOTION_CATEGORIES:
        df[f'emotion_{category}'] = emotion_counts.apply(lambda x: x[category])

    return df


def tokenize_and_clean(
    text: str,
    remove_stopwords: bool = True,
    custom_stopwords: Optional[List[str]] = None
) -> List[str]:
    """
    Tokenize and clean text for analysis.

    Args:
        text: Text to tokenize
        remove_stopwords: Whether to remove stopwords
        custom_stopwords: Additional stopwords to remove

    Returns:
        List of cleaned tokens
    """
    tokens = tokenize_alnum_words(normalize_contractions(text))

    if remove_stopwords:
        stopwords_set = set(STOP_WORDS)
        if custom_stopwords:
            stopwords_set.update(word.lower() for word in custom_stopwords)
        tokens = [t for t in tokens if t not in stopwords_set]

    return tokens


def extract_keywords(
    text: str,
    n: int = 10,
    remove_stopwords: bool = True,
    custom_stopwords: Optional[List[str]] = None
) -> List[str]:
    """
    Extract top keywords from text.

    Args:
        text: Text to extract keywords from
        n: Number of keywords to return
        remove_stopwords: Whether to remove stopwords
        custom_stopwords: Additional stopwords to remove

    Returns:
        List of top keywords
    """
    tokens = tokenize_and_clean(text, remove_stopwords, custom_stopwords)
    word_freq = Counter(tokens)
    top_keywords = [word for word, _ in word_freq.most_common(n)]

    return top_keywords
