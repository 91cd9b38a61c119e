"""
Shared fixtures: small lexicon files written into tmp_path.
"""
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from chatlex.lexicon_store import load_emotion_lexicon, load_polarity_lexicon  # noqa: E402
from chatlex.nrc_emotion import EmotionScorer  # noqa: E402
from chatlex.vader_sentiment import PolarityAnalyzer  # noqa: E402


POLARITY_LINES = [
    "good\t1.9\t0.9434\t[2, 1, 2, 3, 1, 3, 2, 1, 2, 2]",
    "great\t3.1\t0.9434\t[3, 3, 4, 3, 3, 3, 2, 4, 3, 3]",
    "bad\t-2.5\t0.67082\t[-2, -3, -3, -2, -2, -3, -2, -3, -3, -2]",
    "happy\t2.7\t0.64031\t[3, 3, 3, 2, 2, 3, 3, 3, 2, 3]",
    "sad\t-2.1\t0.7\t[-2, -2, -3, -2, -1, -2, -3, -2, -2, -2]",
    "fun\t2.3\t0.78102\t[2, 3, 2, 3, 1, 3, 2, 2, 3, 2]",
    "no\t-1.2\t0.74833\t[-1, -2, -1, -1, 0, -2, -1, -2, -1, -1]",
    "heart\t1.0\t0.5\t[1, 1, 1, 1, 1, 1, 1, 1, 1, 1]",
    ":)\t2.0\t1.18322\t[2, 2, 1, 1, 1, 1, 4, 3, 4, 1]",
]

EMOTION_LINES = [
    "abandon\tanger\t0",
    "abandon\tfear\t1",
    "abandon\tnegative\t1",
    "abandon\tsadness\t1",
    "happy\tanticipation\t1",
    "happy\tjoy\t1",
    "happy\tpositive\t1",
    "happy\ttrust\t1",
    "happy\tbogus\t1",
    "Friend\tJoy\t1",
    "friend\tpositive\t1",
    "sad\tsadness\t1",
    "sad\tnegative\t1",
]


@pytest.fixture
def polarity_lexicon_path(tmp_path):
    path = tmp_path / "vader_lexicon.txt"
    path.write_text("\n".join(POLARITY_LINES) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def emotion_lexicon_path(tmp_path):
    path = tmp_path / "nrc_emotion_lexicon.txt"
    path.write_text("\n".join(EMOTION_LINES) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def polarity_lexicon(polarity_lexicon_path):
    return load_polarity_lexicon(polarity_lexicon_path)


@pytest.fixture
def emotion_lexicon(emotion_lexicon_path):
    return load_emotion_lexicon(emotion_lexicon_path)


@pytest.fixture
def analyzer(polarity_lexicon):
    return PolarityAnalyzer(polarity_lexicon)


@pytest.fixture
def scorer(emotion_lexicon):
    return EmotionScorer(emotion_lexicon)
