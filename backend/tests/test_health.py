"""
Tests for health and root endpoints.
"""


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "CueHall API"


def test_api_root(client):
    response = client.get("/v1/")

    assert response.status_code == 200
    assert response.json()["status"] == "active"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/v1/no-such-thing")

    assert response.status_code == 404
    assert "error" in response.json()
