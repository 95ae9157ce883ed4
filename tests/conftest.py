"""Pytest configuration and fixtures."""

import os
import random
from datetime import date

import pytest

from app.core.config import Settings, get_settings
from tests.fakes.fake_completion import FakeCompletionService, FakePageFetcher

FIXED_TODAY = date(2025, 3, 7)


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SAFETY_DOCS_ENV"] = "test"
    os.environ["ANTHROPIC_API_KEY"] = "test-anthropic-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with no core memory file and the default warn consistency mode."""
    return Settings(
        SAFETY_DOCS_ENV="test",
        CORE_MEMORY_PATH=str(tmp_path / "core-memory.json"),
        RISK_CONSISTENCY_MODE="warn",
    )


@pytest.fixture
def fake_service() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def fake_fetcher() -> FakePageFetcher:
    return FakePageFetcher()


@pytest.fixture
def make_pipeline(settings, fake_fetcher):
    """Build a DocumentPipeline with a fixed clock and seeded rng."""
    from app.graphs.document_pipeline_graph import DocumentPipeline

    def _make(service, **overrides):
        kwargs = {
            "clock": lambda: FIXED_TODAY,
            "rng": random.Random(42),
            "page_fetcher": fake_fetcher,
            "settings": settings,
        }
        kwargs.update(overrides)
        return DocumentPipeline(service, **kwargs)

    return _make
