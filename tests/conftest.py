"""
Pytest configuration and fixtures for testing
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import settings
from app.api.routes import get_user_status_service
from app.services.user_status_service import UserStatusService

TEST_SECRET = "test-worker-secret"


class FakeStore:
    """In-memory DocumentStore that records every lookup."""

    def __init__(self, documents=None, error=None):
        self.documents = documents or {}
        self.error = error
        self.calls = []

    async def get_user_document(self, uid):
        self.calls.append(uid)
        if self.error is not None:
            raise self.error
        return self.documents.get(uid)


@pytest.fixture
def store():
    return FakeStore(
        documents={
            "pro-user": {"subscriptionStatus": "Pro", "email": "pro@example.com"},
            "no-status-user": {"email": "free@example.com"},
            "empty-status-user": {"subscriptionStatus": ""},
        }
    )


@pytest.fixture
def client(store, monkeypatch):
    """
    FastAPI TestClient wired to the fake store. Used without a `with` block,
    so the lifespan (and Firebase initialization) never runs.
    """
    monkeypatch.setattr(settings, "WORKER_SECRET", TEST_SECRET)
    app.dependency_overrides[get_user_status_service] = lambda: UserStatusService(store)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {settings.SECRET_HEADER: TEST_SECRET}
