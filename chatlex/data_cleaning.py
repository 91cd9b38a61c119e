"""
Data Cleaning Module

Prepares a normalized message stream (sender, date_and_time, message) for
scoring: drops export placeholders and empty messages, normalizes sender
names and parses timestamps.
"""

import re
from typing import Dict, Iterable, Optional

import pandas as pd


# Export artifacts that carry no message text
PLACEHOLDER_MESSAGES = frozenset({
    'sent an attachment.',
    'sent an attachment',
    'liked a message.',
    'liked a message',
    '<media omitted>',
    'waiting for this message',
    'this message was deleted',
    'image omitted',
    'video omitted',
    'audio omitted',
    'document omitted',
    'sticker omitted',
    'gif omitted',
})

DEFAULT_EXCLUDED_SENDERS = ('Meta AI',)


def is_system_placeholder(text: str) -> bool:
    """
    Check whether a message is an export placeholder rather than real text.

    Args:
        text: Message content

    Returns:
        True for placeholders such as "sent an attachment." or "<Media omitted>"
    """
    return str(text).strip().lower() in PLACEHOLDER_MESSAGES


def clean_messages(df: pd.DataFrame) -> pd.DataFrame:
    """
    Remove placeholder and empty messages.

    Args:
        df: DataFrame with at least a 'message' column

    Returns:
        Cleaned DataFrame
    """
    if df.empty or 'message' not in df.columns:
        return df

    df = df.copy()
    df['message'] = df['message'].fillna('').astype(str)

    mask = ~df['message'].apply(is_system_placeholder)
    df = df[mask].reset_index(drop=True)

    df = df[df['message'].str.strip() != ''].reset_index(drop=True)

    return df


# Bidi and zero-width marks that exports wrap around names and phone numbers
_INVISIBLE_MARKS = re.compile('[\u200b-\u200f\u202a-\u202e\u2066-\u2069\ufeff]')
_NAME_WHITESPACE = re.compile(r'\s+')


def canonical_sender(name: str) -> str:
    """
    Canonical display form of a sender name.

    Removes direction and zero-width marks, turns non-breaking spaces into
    plain spaces and collapses runs of whitespace.
    """
    name = _INVISIBLE_MARKS.sub('', str(name))
    return _NAME_WHITESPACE.sub(' ', name).strip()


def normalize_sender_names(
    df: pd.DataFrame,
    name_mapping: Optional[Dict[str, str]] = None
) -> pd.DataFrame:
    """
    Canonicalize sender names, then merge aliases through name_mapping.

    Mapping keys go through the same canonical form and are matched without
    regard to case, so {'alice': 'Alice'} also catches 'ALICE' wrapped in
    direction marks.
    Rows whose sender is empty after cleaning are dropped.

    Args:
        df: DataFrame with at least a 'sender' column
        name_mapping: Optional alias -> display name dictionary

    Returns:
        DataFrame with canonical sender names
    """
    if df.empty or 'sender' not in df.columns:
        return df

    aliases = {
        canonical_sender(alias).casefold(): canonical_sender(name)
        for alias, name in (name_mapping or {}).items()
    }

    df = df.copy()
    senders = df['sender'].fillna('').map(canonical_sender)
    df['sender'] = senders.map(lambda sender: aliases.get(sender.casefold(), sender))

    return df[df['sender'] != ''].reset_index(drop=True)


def parse_timestamps(df: pd.DataFrame) -> pd.DataFrame:
    """
    Parse the 'date_and_time' column, keeping rows whose timestamp is missing.

    Messages without a usable timestamp still count towards sender totals and
    sentiment averages; they are only left out of monthly aggregates.

    Args:
        df: DataFrame, optionally with a 'date_and_time' column

    Returns:
        DataFrame with 'date_and_time' as datetime64 (NaT where unparseable)
    """
    df = df.copy()

    if 'date_and_time' not in df.columns:
        df['date_and_time'] = pd.NaT
        return df

    df['date_and_time'] = pd.to_datetime(df['date_and_time'], errors='coerce')
    return df


def preprocess_messages(
    df: pd.DataFrame,
    name_mapping: Optional[Dict[str, str]] = None,
    excluded_senders: Iterable[str] = DEFAULT_EXCLUDED_SENDERS
) -> pd.DataFrame:
    """
    Main preprocessing pipeline for a normalized message stream.

    Args:
        df: DataFrame with 'sender' and 'message' columns and an optional
            'date_and_time' column
        name_mapping: Optional dictionary for sender name normalization
        excluded_senders: Senders whose messages are dropped (bots, assistants)

    Returns:
        Preprocessed DataFrame

    Raises:
        ValueError: If 'sender' or 'message' is missing
    """
    missing = [column for column in ('sender', 'message') if column not in df.columns]
    if missing:
        raise ValueError(f"DataFrame must contain {missing} column(s)")

    if df.empty:
        return parse_timestamps(df)

    df = normalize_sender_names(df, name_mapping)

    excluded = set(excluded_senders)
    if excluded:
        df = df[~df['sender'].isin(excluded)].reset_index(drop=True)

    df = clean_messages(df)
    df = parse_timestamps(df)

    return df
