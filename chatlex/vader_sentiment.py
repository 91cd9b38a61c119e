"""
VADER Sentiment Module

Rule-based polarity scoring in the style of VADER (Hutto & Gilbert, 2014).
Each token gets a valence from the polarity lexicon, adjusted by the words
around it (negators, boosters and dampeners, idioms, "least", capitalization);
the "but" rule and punctuation emphasis are applied over the whole message
before the contributions are normalized into neg/neu/pos/compound scores.

Scoring never raises: unknown or malformed tokens simply contribute 0.
"""

from typing import Dict, List, Sequence, Tuple

from vaderSentiment.vaderSentiment import B_DECR, B_INCR, C_INCR, N_SCALAR, negated

from .lexicon_store import PolarityLexicon
from .text_normalization import (
    allcap_differential,
    is_upper,
    normalize_score,
    round_half_away,
    to_lower_all,
)
from .tokenization import tokenize_words_and_emoticons


BUT_BEFORE_SCALAR = 0.5
BUT_AFTER_SCALAR = 1.5

EXCLAMATION_LIMIT = 4
EXCLAMATION_INCR = 0.292
QUESTION_INCR = 0.18
QUESTION_MAX = 0.96

# Booster/dampener words that raise or lower the intensity of the next words
BOOSTER_DICT: Dict[str, float] = {
    "absolutely": B_INCR, "amazingly": B_INCR, "awfully": B_INCR,
    "completely": B_INCR, "decidedly": B_INCR, "deeply": B_INCR,
    "enormously": B_INCR, "entirely": B_INCR, "especially": B_INCR,
    "extremely": B_INCR, "fabulously": B_INCR, "highly": B_INCR,
    "incredibly": B_INCR, "intensely": B_INCR, "really": B_INCR,
    "remarkably": B_INCR, "so": B_INCR, "thoroughly": B_INCR,
    "totally": B_INCR, "tremendously": B_INCR, "uber": B_INCR,
    "unbelievably": B_INCR, "utterly": B_INCR, "very": B_INCR,

    "almost": B_DECR, "barely": B_DECR, "hardly": B_DECR,
    "just enough": B_DECR, "kind of": B_DECR, "kinda": B_DECR,
    "less": B_DECR, "little": B_DECR, "marginally": B_DECR,
    "occasionally": B_DECR, "partly": B_DECR, "scarcely": B_DECR,
    "slightly": B_DECR, "somewhat": B_DECR, "sort of": B_DECR,
}

# Phrases whose valence replaces the per-token score entirely
SPECIAL_CASE_IDIOMS: Dict[str, float] = {
    "the shit": 3.0,
    "the bomb": 3.0,
    "bad ass": 1.5,
    "badass": 1.5,
    "bus stop": 0.0,
    "yeah right": -2.0,
    "kiss of death": -1.5,
    "to die for": 3.0,
    "beating heart": 3.1,
    "broken heart": -2.9,
}

# Token offsets around the current word, in the order idioms are tried
IDIOM_WINDOWS: Tuple[Tuple[int, ...], ...] = (
    (-1, 0),
    (-2, -1, 0),
    (-2, -1),
    (-3, -2, -1),
    (-3, -2),
    (0, 1),
    (0, 1, 2),
)


def scalar_inc_dec(word: str, valence: float, is_cap_diff: bool) -> float:
    """
    Return the booster/dampener adjustment a modifier word applies to valence.

    The adjustment follows the sign of the valence, and an ALL CAPS modifier
    in a mixed-case message is emphasized further.
    """
    scalar = BOOSTER_DICT.get(word.lower(), 0.0)
    if scalar == 0.0:
        return 0.0

    if valence < 0:
        scalar *= -1
    if is_upper(word) and is_cap_diff:
        if valence > 0:
            scalar += C_INCR
        else:
            scalar -= C_INCR
    return scalar


def amplify_exclamation(text: str) -> float:
    """Emphasis from exclamation points, capped at four marks."""
    ep_count = min(str(text).count("!"), EXCLAMATION_LIMIT)
    return ep_count * EXCLAMATION_INCR


def amplify_question(text: str) -> float:
    """Emphasis from repeated question marks."""
    qm_count = str(text).count("?")
    if qm_count <= 1:
        return 0.0
    if qm_count <= 3:
        return qm_count * QUESTION_INCR
    return QUESTION_MAX


def punctuation_emphasis(text: str) -> float:
    return amplify_exclamation(text) + amplify_question(text)


def but_check(words: Sequence[str], sentiments: List[float]) -> List[float]:
    """
    De-emphasize the clause before the first "but" and emphasize the one after.

    Positions refer to the unfiltered token list, so booster tokens that
    scored 0 still occupy their slot.
    """
    words_lower = to_lower_all(words)
    if "but" not in words_lower:
        return sentiments

    bi = words_lower.index("but")
    for index, sentiment in enumerate(sentiments):
        if index < bi:
            sentiments[index] = sentiment * BUT_BEFORE_SCALAR
        elif index > bi:
            sentiments[index] = sentiment * BUT_AFTER_SCALAR
    return sentiments


def least_check(valence: float, words_lower: Sequence[str], i: int) -> float:
    # "least happy" flips, "at least happy" and "very least happy" do not
    if i > 0 and words_lower[i - 1] == "least":
        if i == 1 or words_lower[i - 2] not in ("at", "very"):
            valence *= N_SCALAR
    return valence


def negation_check(valence: float, words_lower: Sequence[str], start_i: int, i: int) -> float:
    """Apply the negation rule for the modifier at distance start_i + 1."""
    if start_i == 0:
        if negated([words_lower[i - 1]]):
            valence *= N_SCALAR

    elif start_i == 1:
        if words_lower[i - 2] == "never" and words_lower[i - 1] in ("so", "this"):
            valence *= 1.25
        elif words_lower[i - 2] == "without" and words_lower[i - 1] == "doubt":
            pass
        elif negated([words_lower[i - 2]]):
            valence *= N_SCALAR

    elif start_i == 2:
        if words_lower[i - 3] == "never" and (
            words_lower[i - 2] in ("so", "this") or words_lower[i - 1] in ("so", "this")
        ):
            valence *= 1.25
        elif words_lower[i - 3] == "without" and (
            words_lower[i - 2] == "doubt" or words_lower[i - 1] == "doubt"
        ):
            pass
        elif negated([words_lower[i - 3]]):
            valence *= N_SCALAR

    return valence


def special_idioms_check(valence: float, words_lower: Sequence[str], i: int) -> float:
    """
    Override valence with a fixed idiom score, or add a booster bigram.

    Idioms are tried in IDIOM_WINDOWS order and the first hit wins. Without
    a hit, a two-word booster directly behind the token ("kind of", "sort of")
    adjusts the valence instead.
    """
    for window in IDIOM_WINDOWS:
        positions = [i + offset for offset in window]
        if positions[0] < 0 or positions[-1] >= len(words_lower):
            continue
        phrase = " ".join(words_lower[position] for position in positions)
        idiom_valence = SPECIAL_CASE_IDIOMS.get(phrase, 0.0)
        if idiom_valence != 0.0:
            return idiom_valence

    if i >= 2:
        bigram = f"{words_lower[i - 2]} {words_lower[i - 1]}"
        valence += BOOSTER_DICT.get(bigram, 0.0)

    return valence


class PolarityAnalyzer:
    """
    VADER-style sentiment intensity analyzer over a polarity lexicon.

    The analyzer holds no per-call state; one instance may be shared across
    threads as long as the lexicon is not replaced while scoring.
    """

    def __init__(self, lexicon: PolarityLexicon):
        self.lexicon = lexicon

    def token_valences(self, words: Sequence[str]) -> List[float]:
        """
        Score every token in context, before the "but" rule.

        Args:
            words: Tokens from tokenize_words_and_emoticons

        Returns:
            One valence per token, 0.0 for unscored tokens
        """
        words = list(words)
        words_lower = to_lower_all(words)
        is_cap_diff = allcap_differential(words)
        sentiments: List[float] = []

        for i, item_lower in enumerate(words_lower):
            if item_lower in BOOSTER_DICT:
                sentiments.append(0.0)
                continue
            if i < len(words_lower) - 1 and item_lower == "kind" and words_lower[i + 1] == "of":
                sentiments.append(0.0)
                continue

            sentiments.append(self.sentiment_valence(words, words_lower, i, is_cap_diff))

        return sentiments

    def sentiment_valence(
        self,
        words: Sequence[str],
        words_lower: Sequence[str],
        i: int,
        is_cap_diff: bool,
    ) -> float:
        """Valence of the token at position i given its neighbours."""
        item = words[i]
        item_lower = words_lower[i]

        base_valence = self.lexicon.get(item_lower)
        if base_valence is None:
            return 0.0
        valence = base_valence

        # "no" in front of a scored word acts as a negator only
        if item_lower == "no" and i + 1 < len(words_lower) and words_lower[i + 1] in self.lexicon:
            valence = 0.0

        if (
            (i > 0 and words_lower[i - 1] == "no")
            or (i > 1 and words_lower[i - 2] == "no")
            or (i > 2 and words_lower[i - 3] == "no" and words_lower[i - 1] in ("or", "nor"))
        ):
            valence = base_valence * N_SCALAR

        if is_upper(item) and is_cap_diff:
            if valence > 0:
                valence += C_INCR
            else:
                valence -= C_INCR

        for start_i in range(3):
            if i <= start_i:
                break
            preceding = words[i - (start_i + 1)]
            if preceding.lower() in self.lexicon:
                continue

            scalar = scalar_inc_dec(preceding, valence, is_cap_diff)
            if start_i == 1:
                scalar *= 0.95
            elif start_i == 2:
                scalar *= 0.9
            valence += scalar

            valence = negation_check(valence, words_lower, start_i, i)
            if start_i == 2:
                valence = special_idioms_check(valence, words_lower, i)

        return least_check(valence, words_lower, i)

    def sentiment_contributions(self, text: str) -> List[float]:
        """
        Per-token contributions for a message, after the "but" rule.

        Args:
            text: Raw message text

        Returns:
            List aligned with tokenize_words_and_emoticons(text)
        """
        words = tokenize_words_and_emoticons(text)
        return but_check(words, self.token_valences(words))

    def polarity_scores(self, text: str) -> Dict[str, float]:
        """
        Score a message.

        Args:
            text: Raw message text

        Returns:
            Dictionary with neg, neu, pos in [0, 1] (3 decimals) and
            compound in [-1, 1] (4 decimals)
        """
        zero = {"neg": 0.0, "neu": 0.0, "pos": 0.0, "compound": 0.0}
        if len(self.lexicon) == 0:
            return zero

        text = str(text)
        words = tokenize_words_and_emoticons(text)
        if not words:
            return zero

        sentiments = but_check(words, self.token_valences(words))
        return self.score_valence(sentiments, text)

    def score_valence(self, sentiments: Sequence[float], text: str) -> Dict[str, float]:
        """Aggregate token contributions and punctuation into the final scores."""
        if not sentiments:
            return {"neg": 0.0, "neu": 0.0, "pos": 0.0, "compound": 0.0}

        sum_s = float(sum(sentiments))
        punct_emph_amplifier = punctuation_emphasis(text)
        if sum_s > 0:
            sum_s += punct_emph_amplifier
        elif sum_s < 0:
            sum_s -= punct_emph_amplifier

        compound = normalize_score(sum_s)

        pos_sum, neg_sum, neu_count = sift_sentiment_scores(sentiments)
        if pos_sum > abs(neg_sum):
            pos_sum += punct_emph_amplifier
        elif pos_sum < abs(neg_sum):
            neg_sum -= punct_emph_amplifier

        total = pos_sum + abs(neg_sum) + neu_count
        if total == 0:
            return {"neg": 0.0, "neu": 0.0, "pos": 0.0, "compound": 0.0}

        return {
            "neg": round_half_away(abs(neg_sum / total), 3),
            "neu": round_half_away(abs(neu_count / total), 3),
            "pos": round_half_away(abs(pos_sum / total), 3),
            "compound": round_half_away(compound, 4),
        }

    def compound_score(self, text: str) -> float:
        """Return only the compound score of a message."""
        return self.polarity_scores(text)["compound"]


def sift_sentiment_scores(sentiments: Sequence[float]) -> Tuple[float, float, int]:
    """
    Split contributions into positive and negative sums and a neutral count.

    Non-zero contributions are pushed one unit further from zero so that weak
    words still register against the neutral tokens.
    """
    pos_sum = 0.0
    neg_sum = 0.0
    neu_count = 0
    for sentiment_score in sentiments:
        if sentiment_score > 0:
            pos_sum += sentiment_score + 1
        elif sentiment_score < 0:
            neg_sum += sentiment_score - 1
        else:
            neu_count += 1
    return pos_sum, neg_sum, neu_count


def polarity_scores(lexicon: PolarityLexicon, text: str) -> Dict[str, float]:
    """Score a message against a lexicon without keeping an analyzer around."""
    return PolarityAnalyzer(lexicon).polarity_scores(text)
