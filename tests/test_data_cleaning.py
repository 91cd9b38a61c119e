import pandas as pd
import pytest

from chatlex.data_cleaning import (
    canonical_sender,
    clean_messages,
    is_system_placeholder,
    normalize_sender_names,
    preprocess_messages,
)


def test_placeholders_are_detected():
    assert is_system_placeholder(" Sent an attachment. ")
    assert is_system_placeholder("liked a message")
    assert is_system_placeholder("<Media omitted>")
    assert not is_system_placeholder("I sent an attachment yesterday")


def test_clean_messages_drops_placeholders_and_blanks():
    df = pd.DataFrame({
        'sender': ['A', 'B', 'A', 'B'],
        'message': ['hello', 'sent an attachment.', '   ', 'bye'],
    })
    cleaned = clean_messages(df)

    assert cleaned['message'].tolist() == ['hello', 'bye']
    assert len(df) == 4


def test_normalize_sender_names_applies_mapping():
    df = pd.DataFrame({'sender': [' Johnny ', 'Jane', ''], 'message': ['a', 'b', 'c']})
    normalized = normalize_sender_names(df, {' Johnny ': 'John'})

    assert normalized['sender'].tolist() == ['John', 'Jane']


def test_preprocess_messages_keeps_rows_without_timestamps():
    df = pd.DataFrame({
        'sender': ['Alice', 'Meta AI', 'Bob'],
        'date_and_time': ['2024-01-05 10:00', '2024-01-05 10:01', 'not a date'],
        'message': ['good morning', 'How can I help?', 'hi'],
    })
    processed = preprocess_messages(df)

    assert processed['sender'].tolist() == ['Alice', 'Bob']
    assert processed['date_and_time'].iloc[0] == pd.Timestamp('2024-01-05 10:00')
    assert pd.isna(processed['date_and_time'].iloc[1])


def test_preprocess_messages_adds_missing_timestamp_column():
    df = pd.DataFrame({'sender': ['Alice'], 'message': ['hi']})
    processed = preprocess_messages(df)

    assert 'date_and_time' in processed.columns
    assert pd.isna(processed['date_and_time'].iloc[0])


def test_preprocess_messages_requires_columns():
    with pytest.raises(ValueError):
        preprocess_messages(pd.DataFrame({'text': ['hi']}))

def test_canonical_sender_removes_marks_and_collapses_spaces():
    assert canonical_sender('\u202a+1\u00a0555\u00a0123\u202c') == '+1 555 123'
    assert canonical_sender('  Jane \u200e\u202f Doe ') == 'Jane Doe'


def test_sender_aliases_match_canonical_form_without_case():
    df = pd.DataFrame({
        'sender': ['\u202aALICE\u202c', 'alice', 'Bob\u00a0 Smith', '\u200e'],
        'message': ['a', 'b', 'c', 'd'],
    })
    normalized = normalize_sender_names(df, {'Alice': 'Alice', 'bob smith': 'Bob'})

    assert normalized['sender'].tolist() == ['Alice', 'Alice', 'Bob']
