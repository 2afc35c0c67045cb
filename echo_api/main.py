"""
Echo Feedback Intelligence API

Thin FastAPI service exposing feedback classification, tag suggestion,
duplicate detection and the background processing queue.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from echo_api.config import get_settings
from echo_api.middleware import (
    RequestContextMiddleware,
    RequestIDLogFilter,
    SecurityHeadersMiddleware,
)
from echo_api.routers import intelligence, processing
from echo_api.services import processor

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging(level: str) -> None:
    """Configure root logging and tag every record with the request ID."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIDLogFilter())


configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    yield
    await processor.shutdown()


app = FastAPI(
    title="Echo Feedback Intelligence API",
    description="Keyword classification, tag suggestion and duplicate detection for feedback",
    version="0.1.0",
    lifespan=lifespan,
)

# Security headers wrap every response, including CORS preflights
app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Request context and access log (added last, so it is the outermost middleware)
app.add_middleware(RequestContextMiddleware)

# Routers
app.include_router(intelligence.router, prefix="/api/echo")
app.include_router(processing.router, prefix="/api/echo")


def _check_config() -> str:
    """Verify thresholds are usable. Returns 'ok' or 'fail'."""
    s = get_settings()
    thresholds = (s.duplicate_threshold, s.similar_threshold)
    if all(0 <= t <= 1 for t in thresholds) and s.max_batch_size > 0:
        return "ok"
    return "fail"


@app.get("/api/echo/health")
async def health_check() -> JSONResponse:
    """Health check covering configuration and the processing queue."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    result: dict[str, Any] = {
        "status": overall,
        "service": "echo-feedback-intelligence",
        "version": "0.1.0",
        "checks": checks,
        "queue": processor.queue_status().model_dump(),
    }
    return JSONResponse(content=result, status_code=200)
