"""Keyword-based feedback classification into type and priority buckets."""

import logging
from collections.abc import Iterable, Sequence

from echo_api.models.intelligence import (
    BatchClassification,
    ClassificationResult,
    FeedbackItem,
    FeedbackPriority,
    FeedbackType,
)
from echo_api.services.intelligence.keywords import (
    BUG_KEYWORDS,
    FEATURE_KEYWORDS,
    HIGH_PRIORITY_KEYWORDS,
    ISSUE_KEYWORDS,
    LOW_PRIORITY_KEYWORDS,
)
from echo_api.services.intelligence.scoring import (
    calculate_score,
    keyword_confidence,
    matched_keywords,
    round_half_up,
)
from echo_api.services.intelligence.text import normalize

logger = logging.getLogger(__name__)

# A priority bucket wins only when its score is more than this multiple of the other
PRIORITY_DOMINANCE_FACTOR = 2

MAX_REASONS = 3

TYPE_KEYWORDS: dict[FeedbackType, Sequence[str]] = {
    "bug": BUG_KEYWORDS,
    "feature": FEATURE_KEYWORDS,
    "issue": ISSUE_KEYWORDS,
    "other": (),
}


def _combine(title: str, description: str | None) -> str:
    return f"{title} {description or ''}"


def classify_type(title: str, description: str | None = None) -> FeedbackType:
    """Pick the feedback type whose keyword score is strictly highest.

    Any tie between the leading scores (including all zero) yields ``other``.
    """
    text = _combine(title, description)

    bug_score = calculate_score(text, BUG_KEYWORDS)
    feature_score = calculate_score(text, FEATURE_KEYWORDS)
    issue_score = calculate_score(text, ISSUE_KEYWORDS)

    if bug_score > feature_score and bug_score > issue_score:
        return "bug"
    if feature_score > bug_score and feature_score > issue_score:
        return "feature"
    if issue_score > bug_score and issue_score > feature_score:
        return "issue"
    return "other"


def classify_priority(title: str, description: str | None = None) -> FeedbackPriority:
    """Classify priority; mixed signals without a clear 2x lead are ``medium``."""
    text = _combine(title, description)

    high_score = calculate_score(text, HIGH_PRIORITY_KEYWORDS)
    low_score = calculate_score(text, LOW_PRIORITY_KEYWORDS)

    if high_score > 0 and high_score > low_score * PRIORITY_DOMINANCE_FACTOR:
        return "high"
    if low_score > 0 and low_score > high_score * PRIORITY_DOMINANCE_FACTOR:
        return "low"
    return "medium"


def classify_feedback(title: str, description: str | None = None) -> ClassificationResult:
    """Classify type and priority, with a confidence score and match reasons.

    Confidence is the type's keyword score relative to the size of its keyword
    list, capped at 1 and rounded to two decimals (0 for ``other``). Reasons
    list the first three keywords of the chosen type found in the text, in
    keyword-list order.
    """
    text = _combine(title, description)
    normalized = normalize(text)

    feedback_type = classify_type(title, description)
    priority = classify_priority(title, description)

    keywords = TYPE_KEYWORDS[feedback_type]
    confidence = keyword_confidence(calculate_score(text, keywords), len(keywords))

    reasons = [
        f'Matched keyword: "{keyword}"'
        for keyword in matched_keywords(normalized, keywords)
    ]

    return ClassificationResult(
        type=feedback_type,
        priority=priority,
        confidence=round_half_up(confidence, 2),
        reasons=reasons[:MAX_REASONS],
    )


def batch_classify_feedback(items: Iterable[FeedbackItem]) -> list[BatchClassification]:
    """Classify each item independently; an error in one fails the whole batch."""
    results = [
        BatchClassification(
            feedback_id=item.feedback_id,
            classification=classify_feedback(item.title, item.description),
        )
        for item in items
    ]
    logger.debug("Classified batch of %d feedback items", len(results))
    return results
