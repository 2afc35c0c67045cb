"""Shared fixtures for echo feedback intelligence tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from echo_api.config import get_settings

    get_settings.cache_clear()

    # 2. Processing queue state
    import echo_api.services.processor as processor_mod

    processor_mod._queue.clear()
    processor_mod._worker = None
    processor_mod._jobs.clear()
    processor_mod._records.clear()
    processor_mod._duplicate_links.clear()


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from echo_api.config import Settings, get_settings

    test_settings = Settings(
        environment="test",
        duplicate_threshold=0.75,
        similar_threshold=0.3,
        processing_delay=0.0,
        max_batch_size=5,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("echo_api.config.get_settings", lambda: test_settings)

    # Patch get_settings in every module that imports it directly
    # (from echo_api.config import get_settings creates a local binding that
    # the echo_api.config monkeypatch above does not affect)
    for mod_path in [
        "echo_api.main",
        "echo_api.routers.intelligence",
        "echo_api.services.processor",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def existing_feedbacks():
    """Candidate pool for duplicate detection, as a caller would load it."""
    from echo_api.models.intelligence import FeedbackForDuplicateCheck

    return [
        FeedbackForDuplicateCheck(
            feedback_id=1,
            title="App crashes on startup",
            description="The app crashes when I open it",
        ),
        FeedbackForDuplicateCheck(
            feedback_id=2,
            title="Add dark mode feature",
            description="Please add dark mode to the app",
        ),
        FeedbackForDuplicateCheck(
            feedback_id=3,
            title="Login not working",
            description="Cannot log in with my credentials",
        ),
    ]
