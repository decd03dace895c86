"""Tests for the health check endpoint."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from libraryman import __version__
from libraryman.application import create_app

pytestmark = pytest.mark.integration


@pytest.fixture
def client():
    """Create test client with lifespan state."""
    with TestClient(create_app()) as test_client:
        yield test_client


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert data["storage"] == "local"
    assert data["cached_members"] == 0


def test_health_check_echoes_trace_id(client):
    """Test a caller-supplied trace id is returned."""
    response = client.get("/health", headers={"X-Trace-ID": "probe-1"})

    assert response.headers["X-Trace-ID"] == "probe-1"
