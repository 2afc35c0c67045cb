"""Duplicate feedback detection — edit-distance and keyword-overlap scoring.

Cost note: every candidate comparison runs Levenshtein on both the titles and
the descriptions, so ``find_duplicates`` is O(N * L^2) for N candidates of
length L. Callers own tenant scoping: candidates must already be limited to
one organization and exclude soft-deleted items.
"""

import logging
from collections.abc import Iterable, Sequence

from echo_api.models.intelligence import (
    BatchDuplicates,
    DuplicateCandidate,
    FeedbackForDuplicateCheck,
    FeedbackItem,
    SimilarityResult,
)
from echo_api.services.intelligence.scoring import percentage, round_half_up
from echo_api.services.intelligence.text import tokenize

logger = logging.getLogger(__name__)

# Composite score weights
TITLE_WEIGHT = 50
DESCRIPTION_WEIGHT = 30
KEYWORD_WEIGHT = 20

# Component levels above which an explanation is attached
TITLE_REASON_THRESHOLD = 0.8
DESCRIPTION_REASON_THRESHOLD = 0.7
KEYWORD_REASON_THRESHOLD = 0.5

# Minimum composite score to report an existing item as a duplicate
DEFAULT_DUPLICATE_THRESHOLD = 0.75

# Looser cut-off for "similar feedback" hints shown while composing feedback
DEFAULT_SIMILAR_THRESHOLD = 0.3


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance with unit insert/delete/substitute costs."""
    rows, cols = len(a), len(b)
    matrix = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows + 1):
        matrix[i][0] = i
    for j in range(cols + 1):
        matrix[0][j] = j

    for i in range(1, rows + 1):
        for j in range(1, cols + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )

    return matrix[rows][cols]


def string_similarity(s1: str, s2: str) -> float:
    """Case-insensitive similarity in [0, 1]; two empty strings are identical."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    distance = levenshtein_distance(s1.lower(), s2.lower())
    return 1 - distance / max_len


def keyword_overlap(text1: str, text2: str) -> float:
    """Jaccard index of the two texts' keyword token sets (0 when both are empty)."""
    keywords1 = set(tokenize(text1))
    keywords2 = set(tokenize(text2))

    if not keywords1 and not keywords2:
        return 0.0

    return len(keywords1 & keywords2) / len(keywords1 | keywords2)


def calculate_similarity(
    title1: str,
    desc1: str | None,
    title2: str,
    desc2: str | None,
) -> SimilarityResult:
    """Weighted similarity of two feedback items.

    Combines title similarity (50), description similarity (30) and keyword
    overlap of title plus description (20). Reasons explain strong component
    matches and never gate the score.
    """
    desc1 = desc1 or ""
    desc2 = desc2 or ""
    reasons: list[str] = []

    title_sim = string_similarity(title1, title2)
    if title_sim > TITLE_REASON_THRESHOLD:
        reasons.append(f"Titles are very similar ({percentage(title_sim)}%)")

    desc_sim = string_similarity(desc1, desc2)
    if desc_sim > DESCRIPTION_REASON_THRESHOLD:
        reasons.append(f"Descriptions are similar ({percentage(desc_sim)}%)")

    keyword_sim = keyword_overlap(f"{title1} {desc1}", f"{title2} {desc2}")
    if keyword_sim > KEYWORD_REASON_THRESHOLD:
        reasons.append(f"Many keywords in common ({percentage(keyword_sim)}%)")

    total = (
        title_sim * TITLE_WEIGHT
        + desc_sim * DESCRIPTION_WEIGHT
        + keyword_sim * KEYWORD_WEIGHT
    )
    weight_sum = TITLE_WEIGHT + DESCRIPTION_WEIGHT + KEYWORD_WEIGHT

    return SimilarityResult(score=round_half_up(total / weight_sum, 2), reasons=reasons)


def find_duplicates(
    title: str,
    description: str | None,
    existing_feedbacks: Iterable[FeedbackForDuplicateCheck],
    exclude_feedback_id: int | None = None,
    threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
) -> list[DuplicateCandidate]:
    """Find existing feedback items similar enough to count as duplicates.

    Args:
        title: Title of the feedback being checked.
        description: Its description, if any.
        existing_feedbacks: Candidate pool, already scoped by the caller.
        exclude_feedback_id: Candidate ID to skip (usually the item itself).
        threshold: Minimum composite score (inclusive) for a match.

    Returns:
        Matches sorted by similarity, highest first.
    """
    candidates: list[DuplicateCandidate] = []
    compared = 0

    for existing in existing_feedbacks:
        if exclude_feedback_id is not None and existing.feedback_id == exclude_feedback_id:
            continue

        compared += 1
        result = calculate_similarity(
            title,
            description,
            existing.title,
            existing.description,
        )
        if result.score >= threshold:
            candidates.append(
                DuplicateCandidate(
                    feedback_id=existing.feedback_id,
                    title=existing.title,
                    description=existing.description or "",
                    similarity=percentage(result.score),
                    reasons=result.reasons,
                )
            )

    logger.debug(
        "Compared '%s' against %d candidates, %d above %.2f",
        title[:60],
        compared,
        len(candidates),
        threshold,
    )
    return sorted(candidates, key=lambda c: c.similarity, reverse=True)


def find_similar(
    title: str,
    description: str | None,
    existing_feedbacks: Iterable[FeedbackForDuplicateCheck],
    threshold: float = DEFAULT_SIMILAR_THRESHOLD,
) -> list[DuplicateCandidate]:
    """Loosely matching feedback for not-yet-saved text (nothing to exclude)."""
    return find_duplicates(title, description, existing_feedbacks, None, threshold)


def batch_find_duplicates(
    feedbacks: Iterable[FeedbackItem],
    all_feedbacks: Sequence[FeedbackForDuplicateCheck],
    threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
) -> list[BatchDuplicates]:
    """Run ``find_duplicates`` for each item against a shared pool, skipping itself."""
    return [
        BatchDuplicates(
            feedback_id=fb.feedback_id,
            duplicates=find_duplicates(
                fb.title,
                fb.description,
                all_feedbacks,
                fb.feedback_id,
                threshold,
            ),
        )
        for fb in feedbacks
    ]
