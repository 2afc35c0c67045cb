"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Duplicate detection
    duplicate_threshold: float = 0.75
    similar_threshold: float = 0.3  # looser cut-off for "similar feedback" lookups

    # Background processing queue
    processing_delay: float = 0.1  # seconds to wait before each queued job

    # Upper bound on items accepted by batch endpoints and candidate pools
    max_batch_size: int = 100

    # Retained processing state (jobs, records, duplicate links)
    max_tracked_feedback: int = 1000  # per store, least recently used evicted first
    processing_result_ttl: float = 86400  # seconds

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
