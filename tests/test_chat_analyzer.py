import json

import pandas as pd
import pytest

from chatlex.chat_analyzer import ChatSentimentAnalyzer, iter_messages
from chatlex.config import Settings
from chatlex.lexicon_store import LexiconLoadError


def make_chat(rows):
    return pd.DataFrame(rows, columns=['sender', 'date_and_time', 'message'])


@pytest.fixture
def chat_df():
    return make_chat([
        ('Alice', '2024-01-05 09:30', 'I am so happy'),
        ('Bob', '2024-01-06 10:00', 'sent an attachment.'),
        ('Bob', '2024-02-01 08:15', 'sad sad day'),
        ('Meta AI', '2024-02-01 08:16', 'How can I help?'),
        ('alice', '2024-02-02 12:00', 'good movie, good food'),
    ])


@pytest.fixture
def chat_analyzer(polarity_lexicon, emotion_lexicon):
    return ChatSentimentAnalyzer(polarity_lexicon, emotion_lexicon, name_mapping={'alice': 'Alice'})


def test_analyze(chat_analyzer, chat_df):
    results = chat_analyzer.analyze(chat_df)

    assert results['total_messages'] == 3
    assert results['senders'] == ['Alice', 'Bob']
    assert results['statistics']['Alice']['total_messages'] == 2
    assert results['statistics']['Bob']['emotion_sadness'] == 0.5
    assert results['statistics']['Bob']['emotion_joy'] == 0.0
    assert [(row['year'], row['month']) for row in results['monthly_sentiment']] == [(2024, 1), (2024, 2)]
    assert results['top_words']['Alice'][0] == ('good', 2)


def test_analyze_adds_score_columns(chat_analyzer, chat_df):
    chat_analyzer.analyze(chat_df)
    df = chat_analyzer.get_dataframe()

    assert len(df) == 3
    assert 'sentiment_compound' in df.columns
    assert 'emotion_joy' in df.columns


def test_analyze_many_matches_single_stream(polarity_lexicon, emotion_lexicon, chat_df):
    single = ChatSentimentAnalyzer(polarity_lexicon, emotion_lexicon, name_mapping={'alice': 'Alice'})
    single.analyze(chat_df)

    parallel = ChatSentimentAnalyzer(polarity_lexicon, emotion_lexicon, name_mapping={'alice': 'Alice'})
    results = parallel.analyze_many([chat_df.iloc[:2], chat_df.iloc[2:]], max_workers=2)

    pd.testing.assert_frame_equal(parallel.get_summary(), single.get_summary())
    assert results['monthly_sentiment'] == single.analysis_results['monthly_sentiment']
    with pytest.raises(ValueError, match="analyze_many"):
        parallel.get_dataframe()
    assert parallel.get_context().users["Alice"].total_messages == 2


def test_accessors_require_analysis(chat_analyzer, tmp_path):
    with pytest.raises(ValueError):
        chat_analyzer.get_summary()
    with pytest.raises(ValueError):
        chat_analyzer.get_context()
    with pytest.raises(ValueError):
        chat_analyzer.get_dataframe()
    with pytest.raises(ValueError):
        chat_analyzer.export_results(str(tmp_path / 'out.json'))


def test_export_results(chat_analyzer, chat_df, tmp_path):
    chat_analyzer.analyze(chat_df)

    json_path = tmp_path / 'results.json'
    chat_analyzer.export_results(str(json_path))
    exported = json.loads(json_path.read_text(encoding='utf-8'))
    assert exported['senders'] == ['Alice', 'Bob']

    csv_path = tmp_path / 'summary.csv'
    chat_analyzer.export_results(str(csv_path), format='csv')
    summary = pd.read_csv(csv_path, index_col='sender')
    assert summary.loc['Bob', 'total_messages'] == 1

    with pytest.raises(ValueError):
        chat_analyzer.export_results(str(tmp_path / 'out.xml'), format='xml')


def test_iter_messages_maps_missing_timestamps_to_none():
    df = pd.DataFrame({
        'sender': ['Alice'],
        'date_and_time': [pd.NaT],
        'message': ['hi'],
    })
    messages = list(iter_messages(df))

    assert messages[0].timestamp is None
    assert messages[0].text == 'hi'


def test_from_settings(polarity_lexicon_path, emotion_lexicon_path, chat_df):
    settings = Settings(
        polarity_lexicon_path=polarity_lexicon_path,
        emotion_lexicon_path=emotion_lexicon_path,
        log_level='INFO',
        max_workers=1,
        top_words=1,
    )
    chat_analyzer = ChatSentimentAnalyzer.from_settings(settings)
    results = chat_analyzer.analyze(chat_df)

    assert all(len(words) <= 1 for words in results['top_words'].values())


def test_from_settings_with_missing_lexicon(tmp_path, polarity_lexicon_path):
    settings = Settings(
        polarity_lexicon_path=polarity_lexicon_path,
        emotion_lexicon_path=str(tmp_path / 'missing.txt'),
        log_level='INFO',
        max_workers=1,
        top_words=10,
    )
    with pytest.raises(LexiconLoadError):
        ChatSentimentAnalyzer.from_settings(settings)
