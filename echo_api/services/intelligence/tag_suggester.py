"""Keyword-driven tag suggestions for feedback items.

Suggestions come back in ``PREDEFINED_TAGS`` order, not ranked by
confidence. Callers that want the best tag first must sort the result
themselves; changing the order here would change what existing consumers
see.
"""

import logging
from collections.abc import Iterable, Sequence

from echo_api.models.intelligence import BatchTagSuggestions, FeedbackItem, TagSuggestion
from echo_api.services.intelligence.keywords import PREDEFINED_TAGS, TagDefinition
from echo_api.services.intelligence.scoring import (
    calculate_score,
    keyword_confidence,
    matched_keywords,
)
from echo_api.services.intelligence.text import normalize

logger = logging.getLogger(__name__)

# Tags at or below this confidence are dropped. A single exact keyword hit
# clears it for every predefined tag; a lone partial word match does not.
TAG_CONFIDENCE_THRESHOLD = 0.2


def suggest_tags(
    title: str,
    description: str | None = None,
    threshold: float = TAG_CONFIDENCE_THRESHOLD,
    tags: Sequence[TagDefinition] = PREDEFINED_TAGS,
) -> list[TagSuggestion]:
    """Suggest tags whose keyword confidence exceeds ``threshold``.

    Args:
        title: Feedback title.
        description: Optional feedback body.
        threshold: Exclusive lower bound on confidence.
        tags: Tag table to score against, in the order results should appear.

    Returns:
        Suggestions in tag-table order (unsorted).
    """
    text = f"{title} {description or ''}"
    normalized = normalize(text)

    suggestions: list[TagSuggestion] = []
    for tag in tags:
        keywords = tag["keywords"]
        confidence = keyword_confidence(calculate_score(text, keywords), len(keywords))
        if confidence <= threshold:
            continue
        suggestions.append(
            TagSuggestion(
                name=tag["name"],
                slug=tag["slug"],
                confidence=confidence,
                matched_keywords=matched_keywords(normalized, keywords),
            )
        )
    return suggestions


def batch_suggest_tags(items: Iterable[FeedbackItem]) -> list[BatchTagSuggestions]:
    """Suggest tags for each item independently."""
    results = [
        BatchTagSuggestions(
            feedback_id=item.feedback_id,
            suggestions=suggest_tags(item.title, item.description),
        )
        for item in items
    ]
    logger.debug("Suggested tags for batch of %d feedback items", len(results))
    return results


def filter_applied(
    suggestions: Iterable[TagSuggestion], applied_slugs: Iterable[str]
) -> list[TagSuggestion]:
    """Drop suggestions for tags already applied to the feedback item."""
    applied = set(applied_slugs)
    return [s for s in suggestions if s.slug not in applied]
