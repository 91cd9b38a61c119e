"""
Command-line entry point.

    python -m chatlex score "what a great day!"
    python -m chatlex summarize chat1.csv chat2.csv
"""

import argparse
import json
import sys
from typing import List, Optional

import pandas as pd

from .chat_analyzer import ChatSentimentAnalyzer
from .config import configure_logging, get_settings
from .lexicon_store import LexiconLoadError, load_emotion_lexicon, load_polarity_lexicon
from .nlp_analysis import analyze_emotions, analyze_sentiment_vader
from .nrc_emotion import EmotionScorer
from .vader_sentiment import PolarityAnalyzer


def _score(text: str) -> int:
    settings = get_settings()
    analyzer = PolarityAnalyzer(load_polarity_lexicon(settings.polarity_lexicon_path))
    scorer = EmotionScorer(load_emotion_lexicon(settings.emotion_lexicon_path))

    result = {
        'polarity': analyze_sentiment_vader(text, analyzer),
        'emotions': analyze_emotions(text, scorer),
    }
    print(json.dumps(result, indent=2))
    return 0


def _summarize(paths: List[str], output: Optional[str]) -> int:
    frames = [pd.read_csv(path) for path in paths]
    chat_analyzer = ChatSentimentAnalyzer.from_settings()

    if len(frames) == 1:
        chat_analyzer.analyze(frames[0])
    else:
        chat_analyzer.analyze_many(frames)

    if output:
        chat_analyzer.export_results(output, format='csv' if output.endswith('.csv') else 'json')
    else:
        print(chat_analyzer.get_summary().to_string())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="chatlex", description=__doc__.strip().splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    score_parser = subparsers.add_parser("score", help="Score a single message")
    score_parser.add_argument("text")

    summarize_parser = subparsers.add_parser(
        "summarize", help="Per-sender summary of CSV files with sender, date_and_time, message columns"
    )
    summarize_parser.add_argument("paths", nargs="+")
    summarize_parser.add_argument("-o", "--output", help="Write results to a .json or .csv file")

    args = parser.parse_args(argv)
    configure_logging()

    try:
        if args.command == "score":
            return _score(args.text)
        return _summarize(args.paths, args.output)
    except LexiconLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
