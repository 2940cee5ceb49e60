"""
Pytest fixtures for API integration tests.

Provides the FastAPI test client and upload helpers.
"""
import pytest
from fastapi.testclient import TestClient

from sheet_cleaner.main import app


@pytest.fixture(scope="function")
def client():
    """FastAPI test client bound to the application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def upload():
    """Build the multipart ``files`` argument for a single upload."""
    def _upload(content, filename="contacts.csv", content_type="text/csv"):
        return {"file": (filename, content, content_type)}
    return _upload
