"""Feedback intelligence data models.

Every shape here is frozen: results are created fresh per call and never
mutated afterwards.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FeedbackType = Literal["bug", "feature", "issue", "other"]
FeedbackPriority = Literal["low", "medium", "high"]


class FeedbackText(BaseModel):
    """Free text of a single feedback item."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None


class FeedbackItem(FeedbackText):
    """Feedback text tagged with its ID, used by batch operations."""

    feedback_id: int


class FeedbackForDuplicateCheck(BaseModel):
    """An existing feedback item the caller offers as a duplicate candidate."""

    model_config = ConfigDict(frozen=True)

    feedback_id: int
    title: str
    description: str | None = None


class ClassificationResult(BaseModel):
    """Keyword-based type/priority classification."""

    model_config = ConfigDict(frozen=True)

    type: FeedbackType
    priority: FeedbackPriority
    confidence: float = Field(ge=0, le=1)
    reasons: list[str] = []


class BatchClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    feedback_id: int
    classification: ClassificationResult


class TagSuggestion(BaseModel):
    """A tag proposed for a feedback item."""

    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    confidence: float = Field(ge=0, le=1)
    matched_keywords: list[str] = []


class BatchTagSuggestions(BaseModel):
    model_config = ConfigDict(frozen=True)

    feedback_id: int
    suggestions: list[TagSuggestion]


class SimilarityResult(BaseModel):
    """Composite similarity between two feedback items."""

    model_config = ConfigDict(frozen=True)

    score: float
    reasons: list[str] = []


class DuplicateCandidate(BaseModel):
    """An existing feedback item that scored above the duplicate threshold."""

    model_config = ConfigDict(frozen=True)

    feedback_id: int
    title: str
    description: str
    similarity: int = Field(ge=0, le=100)  # percentage
    reasons: list[str] = []


class BatchDuplicates(BaseModel):
    model_config = ConfigDict(frozen=True)

    feedback_id: int
    duplicates: list[DuplicateCandidate]


# Request/response bodies for the intelligence endpoints


class TagSuggestionRequest(FeedbackText):
    applied_slugs: list[str] = []  # tags already on the item, left out of suggestions


class TagSuggestionResponse(BaseModel):
    suggestions: list[TagSuggestion]
    applied_slugs: list[str]


class SimilarityRequest(BaseModel):
    title1: str
    description1: str | None = None
    title2: str
    description2: str | None = None


class DuplicateSearchRequest(FeedbackText):
    existing_feedbacks: list[FeedbackForDuplicateCheck]
    exclude_feedback_id: int | None = None
    threshold: float | None = Field(None, ge=0, le=1)  # defaults to settings


class DuplicateSearchResponse(BaseModel):
    suggestions: list[DuplicateCandidate]


class SimilarSearchRequest(FeedbackText):
    existing_feedbacks: list[FeedbackForDuplicateCheck]
    threshold: float | None = Field(None, ge=0, le=1)


class BatchDuplicateRequest(BaseModel):
    feedbacks: list[FeedbackItem]
    all_feedbacks: list[FeedbackForDuplicateCheck]
    threshold: float | None = Field(None, ge=0, le=1)
