"""Feedback intelligence endpoints — classification, tags, duplicate detection.

Handlers are stateless: every candidate pool arrives in the request body,
already scoped by the caller to one organization with soft-deleted items
removed. Scoring is CPU-bound, so handlers are plain functions that FastAPI
runs in its threadpool.
"""

import logging

from fastapi import APIRouter, HTTPException

from echo_api.config import get_settings
from echo_api.models.intelligence import (
    BatchClassification,
    BatchDuplicateRequest,
    BatchDuplicates,
    ClassificationResult,
    DuplicateCandidate,
    DuplicateSearchRequest,
    DuplicateSearchResponse,
    FeedbackItem,
    FeedbackText,
    SimilarityRequest,
    SimilarityResult,
    SimilarSearchRequest,
    TagSuggestionRequest,
    TagSuggestionResponse,
)
from echo_api.services.intelligence import (
    batch_classify_feedback,
    batch_find_duplicates,
    calculate_similarity,
    classify_feedback,
    filter_applied,
    find_duplicates,
    find_similar,
    suggest_tags,
)

router = APIRouter(prefix="/intelligence", tags=["intelligence"])
logger = logging.getLogger(__name__)


def check_batch_size(size: int) -> None:
    """Reject batches larger than the configured maximum."""
    limit = get_settings().max_batch_size
    if size > limit:
        logger.warning("Rejected batch of %d items (limit %d)", size, limit)
        raise HTTPException(
            status_code=422, detail=f"Batch too large: {size} items (max {limit})"
        )


@router.post("/classify", response_model=ClassificationResult)
def classify(feedback: FeedbackText):
    """Classify feedback type and priority."""
    return classify_feedback(feedback.title, feedback.description)


@router.post("/classify/batch", response_model=list[BatchClassification])
def classify_batch(items: list[FeedbackItem]):
    """Classify several feedback items in one call."""
    check_batch_size(len(items))
    return batch_classify_feedback(items)


@router.post("/tags", response_model=TagSuggestionResponse)
def tags(request: TagSuggestionRequest):
    """Suggest tags, leaving out those already applied.

    Suggestions are in tag-table order, not ranked by confidence.
    """
    suggestions = suggest_tags(request.title, request.description)
    return TagSuggestionResponse(
        suggestions=filter_applied(suggestions, request.applied_slugs),
        applied_slugs=request.applied_slugs,
    )


@router.post("/similarity", response_model=SimilarityResult)
def similarity(request: SimilarityRequest):
    """Score how similar two feedback items are."""
    return calculate_similarity(
        request.title1,
        request.description1,
        request.title2,
        request.description2,
    )


@router.post("/duplicates", response_model=DuplicateSearchResponse)
def duplicates(request: DuplicateSearchRequest):
    """Find likely duplicates of a feedback item among the supplied candidates."""
    check_batch_size(len(request.existing_feedbacks))
    threshold = request.threshold
    if threshold is None:
        threshold = get_settings().duplicate_threshold

    suggestions = find_duplicates(
        request.title,
        request.description,
        request.existing_feedbacks,
        exclude_feedback_id=request.exclude_feedback_id,
        threshold=threshold,
    )
    return DuplicateSearchResponse(suggestions=suggestions)


@router.post("/duplicates/batch", response_model=list[BatchDuplicates])
def duplicates_batch(request: BatchDuplicateRequest):
    """Find duplicates for several items against one shared pool."""
    check_batch_size(len(request.feedbacks))
    check_batch_size(len(request.all_feedbacks))
    threshold = request.threshold
    if threshold is None:
        threshold = get_settings().duplicate_threshold

    return batch_find_duplicates(request.feedbacks, request.all_feedbacks, threshold)


@router.post("/similar", response_model=list[DuplicateCandidate])
def similar(request: SimilarSearchRequest):
    """Loosely matching feedback for text that has not been submitted yet."""
    check_batch_size(len(request.existing_feedbacks))
    threshold = request.threshold
    if threshold is None:
        threshold = get_settings().similar_threshold

    return find_similar(
        request.title,
        request.description,
        request.existing_feedbacks,
        threshold=threshold,
    )
