"""
pytest configuration and fixtures for Quote API tests
"""

import pytest
from fastapi.testclient import TestClient

from quote_api.app.core.store import get_store, reset_store
from quote_api.app.main import app
from quote_api.app.models.quote import Quote, QuoteStatus


@pytest.fixture(autouse=True)
def clean_store():
    """Start every test with an empty store and ids counting from 1."""
    reset_store()
    yield
    reset_store()


@pytest.fixture
def store():
    return get_store()


@pytest.fixture
def client():
    """Create test client"""
    return TestClient(app)


@pytest.fixture
def sample_quotes(store):
    """Four quotes across two categories and all three statuses."""
    quotes = [
        Quote(title="Stay hungry", description="Stay foolish", category="Work",
              tags={"urgent", "motivation"}, author="Steve Jobs", source="Stanford",
              publisher="Stanford News"),
        Quote(title="Deep work", description="Focus wins", category="Work",
              tags={"urgent", "focus"}, author="Cal Newport"),
        Quote(title="Old notes", description="Review later", category="Work",
              status=QuoteStatus.INACTIVE, tags={"later"}),
        Quote(title="Family first", description="Weekend plans", category="Personal",
              status=QuoteStatus.ARCHIVED, tags={"home"}),
    ]
    return store.save_all(quotes)
