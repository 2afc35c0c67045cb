"""Background processing endpoints — queue jobs and read their results."""

import logging

from fastapi import APIRouter, HTTPException

from echo_api.models.processing import (
    DuplicateLink,
    ProcessingJob,
    ProcessingRecord,
    QueueStatus,
)
from echo_api.routers.intelligence import check_batch_size
from echo_api.services import processor

router = APIRouter(prefix="/processing", tags=["processing"])
logger = logging.getLogger(__name__)


@router.post("/jobs", response_model=QueueStatus, status_code=202)
async def submit_job(job: ProcessingJob):
    """Queue a feedback item for classification, tagging and duplicate checks.

    The candidate pool is capped like the other duplicate endpoints.
    """
    check_batch_size(len(job.existing_feedbacks))
    return processor.enqueue(job)


@router.get("/status", response_model=QueueStatus)
async def status():
    """Current queue length and whether the worker is running."""
    return processor.queue_status()


@router.get("/{feedback_id}", response_model=ProcessingRecord)
async def get_result(feedback_id: int):
    """Latest processing outcome for a feedback item."""
    record = processor.get_record(feedback_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No processing record")
    return record


@router.get("/{feedback_id}/duplicates", response_model=list[DuplicateLink])
async def get_duplicates(feedback_id: int):
    """Suspected duplicates recorded by processing."""
    return processor.get_duplicate_links(feedback_id)


@router.post("/{feedback_id}/retry", response_model=QueueStatus, status_code=202)
async def retry_job(feedback_id: int):
    """Re-queue the last job submitted for a feedback item."""
    try:
        return processor.retry(feedback_id)
    except processor.JobNotFoundError as e:
        logger.warning("Retry requested for unknown feedback %d", feedback_id)
        raise HTTPException(status_code=404, detail=str(e)) from e
