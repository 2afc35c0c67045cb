"""Background AI processing for new feedback — a best-effort in-memory FIFO queue.

Jobs run one at a time on a single asyncio task, each after a short delay so
the request that enqueued it can respond first. Scoring itself runs in a
worker thread to keep the event loop responsive. Nothing is persisted: jobs
still queued when the process stops are lost, and failed jobs are only rerun
through an explicit ``retry``.

Retained jobs, records and duplicate links are capped by
``max_tracked_feedback`` and expire after ``processing_result_ttl``.
"""

import asyncio
import contextlib
import logging
import time
from collections import deque
from datetime import datetime, timezone

from echo_api.config import get_settings
from echo_api.models.processing import (
    DuplicateLink,
    DuplicateSummary,
    ProcessingJob,
    ProcessingRecord,
    QueueStatus,
    TagSuggestionSummary,
)
from echo_api.services.cache import BoundedStore
from echo_api.services.intelligence import classify_feedback, find_duplicates, suggest_tags

logger = logging.getLogger(__name__)

_queue: deque[ProcessingJob] = deque()
_worker: asyncio.Task | None = None

_settings = get_settings()

# Last job seen per feedback ID (for retries) and its latest outcome
_jobs = BoundedStore(_settings.max_tracked_feedback, _settings.processing_result_ttl)
_records = BoundedStore(_settings.max_tracked_feedback, _settings.processing_result_ttl)

# Suspected duplicates keyed by (original, duplicate) feedback ID
_duplicate_links = BoundedStore(
    _settings.max_tracked_feedback, _settings.processing_result_ttl
)


class JobNotFoundError(Exception):
    """No processing job has been submitted for the requested feedback ID."""

    pass


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def process_feedback(job: ProcessingJob) -> ProcessingRecord:
    """Classify, tag and duplicate-check a single feedback item.

    Failures are logged and recorded as a ``failed`` record rather than
    raised, so one bad job never stops the queue.
    """
    settings = get_settings()
    start = time.perf_counter()
    _records.set(
        job.feedback_id,
        ProcessingRecord(
            feedback_id=job.feedback_id,
            organization_id=job.organization_id,
            status="processing",
        ),
    )

    try:
        logger.info("Starting AI processing for feedback %d", job.feedback_id)

        classification = classify_feedback(job.title, job.description)
        tag_suggestions = suggest_tags(job.title, job.description)
        duplicates = find_duplicates(
            job.title,
            job.description,
            job.existing_feedbacks,
            exclude_feedback_id=job.feedback_id,
            threshold=settings.duplicate_threshold,
        )

        # Existing links keep their review status
        for duplicate in duplicates:
            _duplicate_links.setdefault(
                (job.feedback_id, duplicate.feedback_id),
                DuplicateLink(
                    original_feedback_id=job.feedback_id,
                    duplicate_feedback_id=duplicate.feedback_id,
                    similarity=duplicate.similarity,
                ),
            )

        record = ProcessingRecord(
            feedback_id=job.feedback_id,
            organization_id=job.organization_id,
            status="completed",
            classification=classification,
            tag_suggestions=[
                TagSuggestionSummary(name=t.name, slug=t.slug, confidence=t.confidence)
                for t in tag_suggestions
            ],
            duplicate_candidates=[
                DuplicateSummary(feedback_id=d.feedback_id, similarity=d.similarity)
                for d in duplicates
            ],
            processing_time_ms=_elapsed_ms(start),
            processed_at=datetime.now(timezone.utc),
        )
        logger.info(
            "AI processing completed for feedback %d in %dms: %d duplicates, %d tags",
            job.feedback_id,
            record.processing_time_ms,
            len(duplicates),
            len(tag_suggestions),
        )

    except Exception as e:
        logger.error("AI processing failed for feedback %d: %s", job.feedback_id, e)
        record = ProcessingRecord(
            feedback_id=job.feedback_id,
            organization_id=job.organization_id,
            status="failed",
            processing_time_ms=_elapsed_ms(start),
            error_message=str(e) or type(e).__name__,
        )

    _records.set(job.feedback_id, record)
    return record


async def _drain() -> None:
    """Work through the queue until it is empty."""
    delay = get_settings().processing_delay
    while _queue:
        job = _queue.popleft()
        await asyncio.sleep(delay)
        await asyncio.to_thread(process_feedback, job)


def enqueue(job: ProcessingJob) -> QueueStatus:
    """Queue a job and start the worker if it is idle.

    Must be called from a running event loop.
    """
    global _worker

    _jobs.set(job.feedback_id, job)
    _records.set(
        job.feedback_id,
        ProcessingRecord(
            feedback_id=job.feedback_id,
            organization_id=job.organization_id,
        ),
    )
    _queue.append(job)
    logger.info("Queued feedback %d (queue length %d)", job.feedback_id, len(_queue))

    if _worker is None or _worker.done():
        _worker = asyncio.get_running_loop().create_task(_drain())

    return queue_status()


def retry(feedback_id: int) -> QueueStatus:
    """Re-queue the last job submitted for ``feedback_id``.

    Raises:
        JobNotFoundError: If no job was submitted for it, or the job has
            since been evicted from the retained state.
    """
    job = _jobs.get(feedback_id)
    if job is None:
        raise JobNotFoundError(f"No processing job for feedback {feedback_id}")
    logger.info("Retrying AI processing for feedback %d", feedback_id)
    return enqueue(job)


def queue_status() -> QueueStatus:
    return QueueStatus(
        queue_length=len(_queue),
        is_processing=_worker is not None and not _worker.done(),
    )


def get_record(feedback_id: int) -> ProcessingRecord | None:
    return _records.get(feedback_id)


def get_duplicate_links(feedback_id: int) -> list[DuplicateLink]:
    """Suspected duplicates recorded for ``feedback_id``, highest similarity first."""
    links = [
        link
        for (original_id, _), link in _duplicate_links.items()
        if original_id == feedback_id
    ]
    return sorted(links, key=lambda link: link.similarity, reverse=True)


async def wait_until_idle() -> None:
    """Block until the worker has drained the queue."""
    if _worker is not None and not _worker.done():
        await _worker


async def shutdown() -> None:
    """Stop the worker and wait for it to finish; jobs still queued are dropped.

    A job already running in a worker thread completes in the background.
    """
    global _worker

    if _queue:
        logger.warning("Dropping %d unprocessed feedback jobs on shutdown", len(_queue))
        _queue.clear()

    worker, _worker = _worker, None
    if worker is not None and not worker.done():
        worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker
