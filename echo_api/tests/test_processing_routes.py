"""Tests for the background processing endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

import echo_api.services.processor as processor

JOB = {
    "feedback_id": 10,
    "organization_id": "org-1",
    "title": "App crashes on startup",
    "description": "The app crashes when I open it",
    "existing_feedbacks": [
        {
            "feedback_id": 1,
            "title": "App crashes on startup",
            "description": "The app crashes when I open it",
        },
        {
            "feedback_id": 2,
            "title": "Add dark mode feature",
            "description": "Please add dark mode to the app",
        },
    ],
}


@pytest.mark.asyncio
async def test_submit_job_then_read_result(mock_settings):
    from echo_api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        submitted = await client.post("/api/echo/processing/jobs", json=JOB)
        assert submitted.status_code == 202
        assert submitted.json()["queue_length"] == 1

        await processor.wait_until_idle()

        record = await client.get("/api/echo/processing/10")
        links = await client.get("/api/echo/processing/10/duplicates")
        status = await client.get("/api/echo/processing/status")

    assert record.status_code == 200
    body = record.json()
    assert body["status"] == "completed"
    assert body["classification"]["type"] == "bug"
    assert body["duplicate_candidates"] == [{"feedback_id": 1, "similarity": 100}]

    assert links.json() == [
        {
            "original_feedback_id": 10,
            "duplicate_feedback_id": 1,
            "similarity": 100,
            "status": "pending",
        }
    ]
    assert status.json() == {"queue_length": 0, "is_processing": False}


@pytest.mark.asyncio
async def test_submit_job_validates_body(mock_settings):
    from echo_api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.post(
            "/api/echo/processing/jobs", json={"feedback_id": 10}
        )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_record_is_404(mock_settings):
    from echo_api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/api/echo/processing/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "No processing record"


@pytest.mark.asyncio
async def test_unknown_feedback_has_no_duplicate_links(mock_settings):
    from echo_api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/api/echo/processing/999/duplicates")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_retry_unknown_feedback_is_404(mock_settings):
    from echo_api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.post("/api/echo/processing/999/retry")

    assert response.status_code == 404
    assert "feedback 999" in response.json()["detail"]


@pytest.mark.asyncio
async def test_retry_failed_job(mock_settings, mocker):
    from echo_api.main import app

    mocker.patch(
        "echo_api.services.processor.classify_feedback",
        side_effect=RuntimeError("boom"),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        await client.post("/api/echo/processing/jobs", json=JOB)
        await processor.wait_until_idle()
        failed = await client.get("/api/echo/processing/10")

        mocker.stopall()
        retried = await client.post("/api/echo/processing/10/retry")
        await processor.wait_until_idle()
        completed = await client.get("/api/echo/processing/10")

    assert failed.json()["status"] == "failed"
    assert failed.json()["error_message"] == "boom"
    assert retried.status_code == 202
    assert completed.json()["status"] == "completed"


@pytest.mark.asyncio
async def test_submit_job_rejects_oversized_pool(mock_settings):
    from echo_api.main import app

    job = dict(
        JOB,
        existing_feedbacks=[
            {"feedback_id": i, "title": f"Feedback {i}"} for i in range(100, 140)
        ],
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.post("/api/echo/processing/jobs", json=job)

    assert response.status_code == 422
    assert "max 5" in response.json()["detail"]
    assert processor.get_record(10) is None
    assert processor.queue_status().queue_length == 0
