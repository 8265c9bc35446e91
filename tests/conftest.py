# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from meeting_join.main import create_app


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all API tests.

    Built through the application factory so settings overrides made via
    environment variables are picked up.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
