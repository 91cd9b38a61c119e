"""
Aggregation Module

Per-sender and per-month accumulation of sentiment and emotion scores.

All state lives in an explicit AnalysisContext that callers create, pass in
and get back. Each run starts from new_context(), so several analyses can
run side by side (one per chat export, one per thread) and be combined with
merge_contexts, which is plain summation.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from .data_cleaning import is_system_placeholder
from .lexicon_store import EMOTION_CATEGORIES, EMOTION_DIMENSIONS
from .nrc_emotion import EmotionScorer, tagged_token_count
from .text_normalization import normalize_contractions, round_half_away
from .tokenization import STOP_WORDS, tokenize_alnum_words
from .vader_sentiment import PolarityAnalyzer

MonthKey = Tuple[int, int]


@dataclass
class ChatMessage:
    """One message of a normalized chat stream."""

    sender: str
    timestamp: Optional[datetime]
    text: str


@dataclass
class MonthlyAggregate:
    sum_compound: float = 0.0
    count: int = 0

    def add(self, other: "MonthlyAggregate") -> None:
        self.sum_compound += other.sum_compound
        self.count += other.count


@dataclass
class UserStats:
    """Running totals for one sender."""

    total_messages: int = 0
    total_words: int = 0
    word_messages: int = 0
    message_word_lengths: List[int] = field(default_factory=list)
    word_frequency: Counter = field(default_factory=Counter)

    vader_pos_sum: float = 0.0
    vader_neg_sum: float = 0.0
    vader_neu_sum: float = 0.0
    vader_compound_sum: float = 0.0
    vader_samples: int = 0

    nrc_emotion_sums: List[float] = field(default_factory=lambda: [0.0] * EMOTION_DIMENSIONS)
    nrc_tagged_tokens: int = 0

    longest_message_words: int = 0
    longest_message_content: str = ""

    def add(self, other: "UserStats") -> None:
        self.total_messages += other.total_messages
        self.total_words += other.total_words
        self.word_messages += other.word_messages
        self.message_word_lengths.extend(other.message_word_lengths)
        self.word_frequency.update(other.word_frequency)

        self.vader_pos_sum += other.vader_pos_sum
        self.vader_neg_sum += other.vader_neg_sum
        self.vader_neu_sum += other.vader_neu_sum
        self.vader_compound_sum += other.vader_compound_sum
        self.vader_samples += other.vader_samples

        for index in range(EMOTION_DIMENSIONS):
            self.nrc_emotion_sums[index] += other.nrc_emotion_sums[index]
        self.nrc_tagged_tokens += other.nrc_tagged_tokens

        if other.longest_message_words > self.longest_message_words:
            self.longest_message_words = other.longest_message_words
            self.longest_message_content = other.longest_message_content


@dataclass
class AnalysisContext:
    """Everything one analysis run accumulates."""

    users: Dict[str, UserStats] = field(default_factory=dict)
    monthly: Dict[MonthKey, MonthlyAggregate] = field(default_factory=dict)
    user_monthly: Dict[str, Dict[MonthKey, MonthlyAggregate]] = field(default_factory=dict)
    participant_name_words: set = field(default_factory=set)

    def user(self, sender: str) -> UserStats:
        if sender not in self.users:
            self.users[sender] = UserStats()
        return self.users[sender]


def new_context() -> AnalysisContext:
    return AnalysisContext()


def _month_key(timestamp) -> Optional[MonthKey]:
    if timestamp is None or pd.isna(timestamp):
        return None
    return (int(timestamp.year), int(timestamp.month))


def accumulate_message(
    context: AnalysisContext,
    message: ChatMessage,
    analyzer: PolarityAnalyzer,
    scorer: EmotionScorer
) -> AnalysisContext:
    """
    Add one message to the context.

    Placeholders are ignored. A message without text still counts towards
    the sender's total; a message with text is scored by both scorers.

    Args:
        context: Context to update
        message: Message to add
        analyzer: Polarity analyzer
        scorer: Emotion scorer

    Returns:
        The updated context
    """
    content = message.text or ""
    if content and is_system_placeholder(content):
        return context

    sender = message.sender
    stats = context.user(sender)
    stats.total_messages += 1
    context.participant_name_words.update(tokenize_alnum_words(sender.lower()))

    if not content:
        return context

    words = tokenize_alnum_words(normalize_contractions(content))
    word_count = len(words)
    if word_count > 0:
        stats.total_words += word_count
        stats.word_messages += 1
        stats.message_word_lengths.append(word_count)
        stats.word_frequency.update(words)

        if word_count > stats.longest_message_words:
            stats.longest_message_words = word_count
            stats.longest_message_content = content

        nrc_scores = scorer.score_words(words)
        for index in range(EMOTION_DIMENSIONS):
            stats.nrc_emotion_sums[index] += nrc_scores[index]
        stats.nrc_tagged_tokens += tagged_token_count(nrc_scores)

    scores = analyzer.polarity_scores(content)
    stats.vader_pos_sum += scores['pos']
    stats.vader_neg_sum += scores['neg']
    stats.vader_neu_sum += scores['neu']
    stats.vader_compound_sum += scores['compound']
    stats.vader_samples += 1

    key = _month_key(message.timestamp)
    if key is not None:
        single = MonthlyAggregate(sum_compound=scores['compound'], count=1)
        context.monthly.setdefault(key, MonthlyAggregate()).add(single)
        context.user_monthly.setdefault(sender, {}).setdefault(key, MonthlyAggregate()).add(single)

    return context


def accumulate_messages(
    context: AnalysisContext,
    messages: Iterable[ChatMessage],
    analyzer: PolarityAnalyzer,
    scorer: EmotionScorer
) -> AnalysisContext:
    for message in messages:
        context = accumulate_message(context, message, analyzer, scorer)
    return context


def merge_contexts(*contexts: AnalysisContext) -> AnalysisContext:
    """
    Combine several contexts into a new one.

    Args:
        *contexts: Contexts to merge; they are left unchanged

    Returns:
        New context holding the summed totals
    """
    merged = new_context()
    for context in contexts:
        for sender, stats in context.users.items():
            merged.user(sender).add(stats)

        for key, aggregate in context.monthly.items():
            merged.monthly.setdefault(key, MonthlyAggregate()).add(aggregate)

        for sender, months in context.user_monthly.items():
            user_months = merged.user_monthly.setdefault(sender, {})
            for key, aggregate in months.items():
                user_months.setdefault(key, MonthlyAggregate()).add(aggregate)

        merged.participant_name_words.update(context.participant_name_words)

    return merged


def _ratio(numerator: float, denominator: float, digits: int) -> float:
    if denominator <= 0:
        return np.nan
    return round_half_away(numerator / denominator, digits)


def summarize_users(context: AnalysisContext) -> pd.DataFrame:
    """
    Build the per-sender summary table.

    Sentiment columns are averages over scored messages. Emotion columns are
    each category's share of the sender's tagged tokens, where a token tagged
    with several categories is counted once per category.

    Args:
        context: Accumulated context

    Returns:
        DataFrame indexed by sender, NaN where a sender has nothing to average
    """
    rows = []
    for sender in sorted(context.users):
        stats = context.users[sender]
        row = {
            'sender': sender,
            'total_messages': stats.total_messages,
            'total_words': stats.total_words,
            'avg_words_per_message': _ratio(stats.total_words, stats.word_messages, 2),
            'median_words_per_message': (
                float(np.median(stats.message_word_lengths))
                if stats.message_word_lengths else np.nan
            ),
            'avg_pos': _ratio(stats.vader_pos_sum, stats.vader_samples, 3),
            'avg_neg': _ratio(stats.vader_neg_sum, stats.vader_samples, 3),
            'avg_neu': _ratio(stats.vader_neu_sum, stats.vader_samples, 3),
            'avg_compound': _ratio(stats.vader_compound_sum, stats.vader_samples, 4),
            'nrc_tagged_tokens': stats.nrc_tagged_tokens,
        }
        for index, category in enumerate(EMOTION_CATEGORIES):
            row[f'emotion_{category}'] = _ratio(
                stats.nrc_emotion_sums[index], stats.nrc_tagged_tokens, 3
            )
        rows.append(row)

    if not rows:
        columns = ['total_messages', 'total_words', 'avg_words_per_message',
                   'median_words_per_message', 'avg_pos', 'avg_neg', 'avg_neu',
                   'avg_compound', 'nrc_tagged_tokens']
        columns += [f'emotion_{category}' for category in EMOTION_CATEGORIES]
        return pd.DataFrame(columns=columns, index=pd.Index([], name='sender'))

    return pd.DataFrame(rows).set_index('sender')


def monthly_sentiment(context: AnalysisContext, sender: Optional[str] = None) -> pd.DataFrame:
    """
    Average compound score per calendar month.

    Args:
        context: Accumulated context
        sender: Restrict to one sender; all senders when None

    Returns:
        DataFrame with columns year, month, avg_compound, messages
    """
    if sender is None:
        months = context.monthly
    else:
        months = context.user_monthly.get(sender, {})

    rows = [
        {
            'year': year,
            'month': month,
            'avg_compound': aggregate.sum_compound / aggregate.count,
            'messages': aggregate.count,
        }
        for (year, month), aggregate in sorted(months.items())
        if aggregate.count > 0
    ]
    return pd.DataFrame(rows, columns=['year', 'month', 'avg_compound', 'messages'])


def top_words(
    context: AnalysisContext,
    sender: str,
    n: int = 10,
    extra_stopwords: Optional[Iterable[str]] = None
) -> List[Tuple[str, int]]:
    """
    Most frequent words of a sender, without stop words or participant names.

    Args:
        context: Accumulated context
        sender: Sender to report on
        n: Number of words to return
        extra_stopwords: Additional words to exclude

    Returns:
        List of (word, count) pairs, most frequent first
    """
    stats = context.users.get(sender)
    if stats is None:
        return []

    excluded = set(STOP_WORDS) | context.participant_name_words
    if extra_stopwords:
        excluded.update(word.lower() for word in extra_stopwords)

    ranked = sorted(
        ((word, count) for word, count in stats.word_frequency.items() if word not in excluded),
        key=lambda item: (-item[1], item[0])
    )
    return ranked[:n]
