"""
Main Chat Analyzer Class

Orchestrator that cleans message streams, scores every message and
aggregates the results per sender and per month.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Iterator, Optional

import pandas as pd

from .aggregation import (
    AnalysisContext,
    ChatMessage,
    accumulate_messages,
    merge_contexts,
    monthly_sentiment,
    new_context,
    summarize_users,
    top_words,
)
from .config import Settings, get_settings
from .data_cleaning import preprocess_messages
from .lexicon_store import EmotionLexicon, PolarityLexicon, load_emotion_lexicon, load_polarity_lexicon
from .nlp_analysis import add_emotion_features, add_sentiment_features
from .nrc_emotion import EmotionScorer
from .vader_sentiment import PolarityAnalyzer

logger = logging.getLogger(__name__)


def iter_messages(df: pd.DataFrame) -> Iterator[ChatMessage]:
    """
    Turn a preprocessed DataFrame into ChatMessage records.

    Args:
        df: DataFrame with 'sender', 'message' and 'date_and_time' columns

    Yields:
        One ChatMessage per row, timestamp None where it is missing
    """
    for sender, timestamp, text in zip(df['sender'], df['date_and_time'], df['message']):
        if pd.isna(timestamp):
            timestamp = None
        yield ChatMessage(sender=str(sender), timestamp=timestamp, text=str(text))


class ChatSentimentAnalyzer:
    """
    Main analyzer class for chat sentiment and emotion analysis.

    Works on normalized message streams: DataFrames with 'sender', 'message'
    and optionally 'date_and_time' columns, one per chat export.
    """

    def __init__(
        self,
        polarity_lexicon: PolarityLexicon,
        emotion_lexicon: EmotionLexicon,
        name_mapping: Optional[Dict[str, str]] = None,
        n_top_words: int = 10
    ):
        """
        Initialize the analyzer.

        Args:
            polarity_lexicon: Loaded VADER-style lexicon
            emotion_lexicon: Loaded NRC-style lexicon
            name_mapping: Optional dictionary for sender name normalization
            n_top_words: Number of top words reported per sender
        """
        self.analyzer = PolarityAnalyzer(polarity_lexicon)
        self.scorer = EmotionScorer(emotion_lexicon)
        self.name_mapping = name_mapping or {}
        self.n_top_words = n_top_words
        self.processed_df: Optional[pd.DataFrame] = None
        self.context: Optional[AnalysisContext] = None
        self.analysis_results: Dict = {}

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        name_mapping: Optional[Dict[str, str]] = None
    ) -> "ChatSentimentAnalyzer":
        """
        Build an analyzer from the configured lexicon files.

        Raises:
            LexiconLoadError: If either lexicon cannot be loaded
        """
        settings = settings or get_settings()
        return cls(
            load_polarity_lexicon(settings.polarity_lexicon_path),
            load_emotion_lexicon(settings.emotion_lexicon_path),
            name_mapping=name_mapping,
            n_top_words=settings.top_words,
        )

    def _score_stream(self, df: pd.DataFrame) -> AnalysisContext:
        processed = preprocess_messages(df, name_mapping=self.name_mapping)
        if processed.empty:
            logger.warning("Skipping message stream with no scorable messages")
            return new_context()
        return accumulate_messages(new_context(), iter_messages(processed), self.analyzer, self.scorer)

    def analyze(self, df: pd.DataFrame) -> Dict:
        """
        Run the full pipeline on one message stream.

        Args:
            df: DataFrame with 'sender' and 'message' columns

        Returns:
            Dictionary with analysis results
        """
        processed = preprocess_messages(df, name_mapping=self.name_mapping)
        processed = add_sentiment_features(processed, self.analyzer)
        processed = add_emotion_features(processed, self.scorer)
        self.processed_df = processed

        self.context = accumulate_messages(
            new_context(), iter_messages(processed), self.analyzer, self.scorer
        )
        logger.info(f"Analyzed {len(processed)} messages from {len(self.context.users)} senders")

        self.analysis_results = self._build_results()
        return self.analysis_results

    def analyze_many(self, frames: Iterable[pd.DataFrame], max_workers: Optional[int] = None) -> Dict:
        """
        Analyze several message streams in parallel and merge the results.

        Each stream is scored in its own worker with its own context; the
        contexts are summed once every worker has finished.

        Args:
            frames: One DataFrame per chat export
            max_workers: Thread pool size; the configured default when None

        Returns:
            Dictionary with analysis results of all streams combined
        """
        frames = list(frames)
        max_workers = max_workers or get_settings().max_workers

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            contexts = list(executor.map(self._score_stream, frames))

        self.context = merge_contexts(*contexts)
        self.processed_df = None
        logger.info(f"Merged {len(contexts)} message streams from {len(self.context.users)} senders")

        self.analysis_results = self._build_results()
        return self.analysis_results

    def _build_results(self) -> Dict:
        summary = summarize_users(self.context)
        monthly = monthly_sentiment(self.context)

        results = {
            'total_messages': int(sum(stats.total_messages for stats in self.context.users.values())),
            'senders': list(summary.index),
            'statistics': {
                sender: {key: (None if pd.isna(value) else value) for key, value in row.items()}
                for sender, row in summary.to_dict(orient='index').items()
            },
            'monthly_sentiment': monthly.to_dict(orient='records'),
            'top_words': {
                sender: top_words(self.context, sender, n=self.n_top_words)
                for sender in summary.index
            },
        }
        return results

    def get_summary(self) -> pd.DataFrame:
        """
        Get the per-sender summary table.

        Returns:
            DataFrame indexed by sender
        """
        if self.context is None:
            raise ValueError("Must call analyze() first")
        return summarize_users(self.context)

    def get_context(self) -> AnalysisContext:
        if self.context is None:
            raise ValueError("Must call analyze() first")
        return self.context

    def get_dataframe(self) -> pd.DataFrame:
        """
        Get the processed DataFrame with per-message score columns.

        Only analyze() keeps per-message rows; analyze_many() keeps the merged
        context alone.

        Returns:
            Processed DataFrame
        """
        if self.processed_df is None:
            if self.context is not None:
                raise ValueError("Per-message rows are not kept by analyze_many(); use analyze() for one stream")
            raise ValueError("Must call analyze() first")
        return self.processed_df.copy()

    def export_results(
        self,
        output_path: str,
        format: str = 'json'
    ) -> None:
        """
        Export analysis results to file.

        Args:
            output_path: Path to output file
            format: Export format ('json' for the results, 'csv' for the
                per-sender summary)
        """
        if self.analysis_results == {}:
            raise ValueError("Must call analyze() first")

        if format == 'json':
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(self.analysis_results, f, indent=2, default=str)
        elif format == 'csv':
            self.get_summary().to_csv(output_path)
        else:
            raise ValueError(f"Unknown format: {format}. Use 'json' or 'csv'")

