"""
Tests for the health check endpoint.
"""


def test_health_check_returns_200(client):
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_needs_no_token(client):
    """Load balancers call it without credentials."""
    response = client.get("/health")
    assert response.json()["status"] == "healthy"


def test_health_check_returns_service_name(client):
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "pond-ledger"


def test_health_check_reports_database_status(client):
    response = client.get("/health")
    data = response.json()
    assert data["database"] == "healthy"
