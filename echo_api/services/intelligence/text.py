"""Text normalization shared by the classifier, tag suggester and duplicate detector."""

import re

# Anything that is not an ASCII word char, whitespace, or a CJK ideograph
_STRIP_PATTERN = re.compile(r"[^\w\s\u4e00-\u9fa5]", re.ASCII)
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Shortest word that still counts as a keyword token
MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset(
    {
        # English
        "the",
        "a",
        "an",
        "and",
        "or",
        "but",
        "in",
        "on",
        "at",
        "to",
        "for",
        "of",
        "with",
        "by",
        "from",
        "as",
        "is",
        "was",
        "are",
        "were",
        # Chinese
        "的",
        "了",
        "是",
        "在",
        "和",
        "或",
        "但是",
        "从",
        "为了",
        "关于",
    }
)


def normalize(text: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace.

    Latin letters, digits, underscores and CJK ideographs (U+4E00–U+9FA5)
    survive; everything else becomes a space.
    """
    stripped = _STRIP_PATTERN.sub(" ", text.lower())
    return _WHITESPACE_PATTERN.sub(" ", stripped).strip()


def split_words(normalized: str) -> list[str]:
    """Split already-normalized text into words (empty text has none)."""
    return normalized.split()


def tokenize(text: str) -> list[str]:
    """Extract keyword tokens: normalized words longer than two characters
    that are not stop words."""
    return [
        word
        for word in split_words(normalize(text))
        if len(word) >= MIN_TOKEN_LENGTH and word not in STOP_WORDS
    ]
