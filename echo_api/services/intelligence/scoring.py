"""Keyword scoring and rounding helpers."""

import math
from collections.abc import Sequence

from echo_api.services.intelligence.text import normalize, split_words

# Points for a keyword found anywhere in the normalized text
EXACT_MATCH_POINTS = 2.0

# Points for each word that contains, or is contained in, a keyword
PARTIAL_MATCH_POINTS = 0.5


def calculate_score(text: str, keywords: Sequence[str]) -> float:
    """Score ``text`` against a keyword list.

    A keyword contained in the normalized text earns ``EXACT_MATCH_POINTS``.
    Independently, every word of the text that is a substring of the keyword
    (or has the keyword as a substring) earns ``PARTIAL_MATCH_POINTS``, so a
    full hit is usually counted twice. The score is unbounded.
    """
    normalized = normalize(text)
    # Empty or punctuation-only text has no words and scores 0 against any list
    words = split_words(normalized)

    score = 0.0
    for keyword in keywords:
        needle = keyword.lower()
        if needle in normalized:
            score += EXACT_MATCH_POINTS
        for word in words:
            if word in needle or needle in word:
                score += PARTIAL_MATCH_POINTS
    return score


def matched_keywords(normalized: str, keywords: Sequence[str]) -> list[str]:
    """Keywords contained in already-normalized text, in list order."""
    return [keyword for keyword in keywords if keyword.lower() in normalized]


def keyword_confidence(score: float, keyword_count: int) -> float:
    """Map a raw score onto [0, 1] relative to the size of its keyword list."""
    if keyword_count <= 0:
        return 0.0
    return max(0.0, min(score / keyword_count, 1.0))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` places with halves going up (2.5 -> 3).

    Unlike the built-in ``round``, ties never go to the even neighbour.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percentage(value: float) -> int:
    """Express a 0..1 ratio as a whole percentage."""
    return int(round_half_up(value * 100))
