"""
Tokenization Module

Two tokenizers over message text:

- tokenize_words_and_emoticons keeps case and short symbolic tokens and feeds
  the polarity scorer.
- tokenize_alnum_words lowercases alphanumeric runs and feeds the emotion
  scorer and the word-frequency statistics.
"""

import re
import string
from typing import List


PUNCTUATION = string.punctuation

_ALNUM_RUN = re.compile(r"[A-Za-z0-9]+")

# ASCII whitespace only; NBSP and other Unicode spaces stay inside tokens
_ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")

# Leftovers from splitting contractions on the apostrophe
CONTRACTION_FRAGMENTS = frozenset({"m", "s", "t", "d", "ll", "re", "ve"})

JUNK_TOKENS = frozenset({
    "don", "t", "ll", "ve", "re", "im", "id", "ill", "youre", "youd",
    "attachment", "attachments", "sent", "send",
})

STOP_WORDS = frozenset({
    "a", "about", "after", "again", "against", "all", "also", "am", "an", "and", "any",
    "are", "as", "at", "be", "because", "been", "before", "being", "below", "between",
    "both", "but", "by", "can", "come", "could", "did", "do", "does", "doing", "down",
    "during", "each", "even", "ever", "every", "few", "for", "from", "further", "get",
    "go", "goes", "got", "had", "has", "have", "having", "he", "her", "here", "hers",
    "herself", "him", "himself", "his", "how", "i", "if", "in", "into", "is", "it",
    "its", "itself", "just", "know", "let", "like", "made", "make", "makes", "many",
    "may", "me", "might", "more", "most", "much", "must", "my", "myself", "new", "no",
    "nor", "not", "now", "of", "off", "on", "once", "one", "only", "or", "other", "our",
    "ours", "ourselves", "out", "over", "own", "perhaps", "put", "said", "same",
    "say", "says", "see", "seen", "she", "should", "since", "so", "some", "still",
    "such", "take", "taken", "than", "that", "the", "their", "theirs", "them",
    "themselves", "then", "there", "these", "they", "thing", "things", "think",
    "this", "those", "through", "to", "too", "under", "until", "up", "use", "used",
    "using", "very", "want", "was", "we", "well", "were", "what", "when", "where",
    "which", "while", "who", "whom", "why", "will", "with", "within", "without",
    "would", "yeah", "yep", "yes", "yet", "you", "your", "yours", "yourself",
    "yourselves",

    # Chat fillers, reactions and low-information words
    "alright", "anyway", "aww", "bc", "bet", "brb", "bro", "bruh", "btw", "cool", "cuz",
    "dude", "eh", "fine", "gonna", "hah", "haha", "hahaha", "hehe", "hey", "hi",
    "hmm", "idc", "idk", "idek", "im", "jk", "k", "kk", "lmao", "lmfao", "lol", "loll",
    "lolol", "man", "maybe", "nah", "nice", "ok", "okay", "omg", "oof", "oop",
    "pls", "plz", "pretty", "prob", "probably", "really", "right", "rn", "sure",
    "thanks", "thank", "thx", "true", "uh", "uhh", "ugh", "um", "whoa",
    "wow", "wtf", "yall", "yup", "ur",

    # Export noise
    "attachment", "attachments", "message", "messages", "reacted", "sent",
})


def _strip_punctuation_if_word(token: str) -> str:
    # Emoticons such as ":)" or ":-)" collapse to almost nothing when stripped
    stripped = token.strip(PUNCTUATION)
    if len(stripped) <= 2:
        return token
    return stripped


def tokenize_words_and_emoticons(text: str) -> List[str]:
    """
    Split text on ASCII whitespace, trimming boundary punctuation from word tokens.

    Case is preserved because capitalization drives the emphasis rule.

    Args:
        text: Raw message text

    Returns:
        List of tokens in message order
    """
    tokens = _ASCII_WHITESPACE.split(str(text))
    return [_strip_punctuation_if_word(token) for token in tokens if token]


def tokenize_alnum_words(text: str) -> List[str]:
    """
    Extract lowercase alphanumeric words, dropping fragments and junk tokens.

    Single-character tokens are dropped except the pronoun "i". Stop words are
    kept; word-frequency helpers filter them with STOP_WORDS.

    Args:
        text: Message text, usually passed through normalize_contractions first

    Returns:
        List of lowercase words
    """
    words = [match.group(0).lower() for match in _ALNUM_RUN.finditer(str(text))]

    filtered = []
    for word in words:
        if word == "i":
            filtered.append(word)
            continue
        if len(word) == 1:
            continue
        if word in CONTRACTION_FRAGMENTS or word in JUNK_TOKENS:
            continue
        filtered.append(word)

    return filtered
