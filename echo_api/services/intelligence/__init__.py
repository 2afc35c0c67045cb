"""Feedback intelligence: classification, tag suggestion and duplicate detection.

Pure, synchronous functions over caller-supplied text. Nothing here touches
storage or the network.
"""

from echo_api.services.intelligence.classifier import (
    batch_classify_feedback,
    classify_feedback,
    classify_priority,
    classify_type,
)
from echo_api.services.intelligence.duplicate_detector import (
    DEFAULT_DUPLICATE_THRESHOLD,
    DEFAULT_SIMILAR_THRESHOLD,
    batch_find_duplicates,
    calculate_similarity,
    find_duplicates,
    find_similar,
    keyword_overlap,
    levenshtein_distance,
    string_similarity,
)
from echo_api.services.intelligence.tag_suggester import (
    TAG_CONFIDENCE_THRESHOLD,
    batch_suggest_tags,
    filter_applied,
    suggest_tags,
)
from echo_api.services.intelligence.text import normalize, tokenize

__all__ = [
    "DEFAULT_DUPLICATE_THRESHOLD",
    "DEFAULT_SIMILAR_THRESHOLD",
    "TAG_CONFIDENCE_THRESHOLD",
    "batch_classify_feedback",
    "batch_find_duplicates",
    "batch_suggest_tags",
    "calculate_similarity",
    "classify_feedback",
    "classify_priority",
    "classify_type",
    "filter_applied",
    "find_duplicates",
    "find_similar",
    "keyword_overlap",
    "levenshtein_distance",
    "normalize",
    "string_similarity",
    "suggest_tags",
    "tokenize",
]
