"""Background processing job and result models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from echo_api.models.intelligence import ClassificationResult, FeedbackForDuplicateCheck

ProcessingStatus = Literal["pending", "processing", "completed", "failed"]
DuplicateLinkStatus = Literal["pending", "confirmed", "rejected"]


class ProcessingJob(BaseModel):
    """A newly created feedback item queued for AI processing.

    ``existing_feedbacks`` is the duplicate candidate pool. The submitter is
    responsible for limiting it to the item's organization and leaving out
    soft-deleted feedback.
    """

    feedback_id: int
    organization_id: str
    title: str
    description: str | None = None
    existing_feedbacks: list[FeedbackForDuplicateCheck] = []


class TagSuggestionSummary(BaseModel):
    name: str
    slug: str
    confidence: float


class DuplicateSummary(BaseModel):
    feedback_id: int
    similarity: int


class ProcessingRecord(BaseModel):
    """Outcome of processing one feedback item."""

    feedback_id: int
    organization_id: str
    status: ProcessingStatus = "pending"
    classification: ClassificationResult | None = None
    tag_suggestions: list[TagSuggestionSummary] = []
    duplicate_candidates: list[DuplicateSummary] = []
    processing_time_ms: int | None = None
    error_message: str | None = None
    processed_at: datetime | None = None


class DuplicateLink(BaseModel):
    """A suspected duplicate pair awaiting review."""

    original_feedback_id: int
    duplicate_feedback_id: int
    similarity: int
    status: DuplicateLinkStatus = "pending"


class QueueStatus(BaseModel):
    queue_length: int
    is_processing: bool
