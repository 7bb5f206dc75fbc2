from fastapi.testclient import TestClient

from src.main import app

client = TestClient(app)


def test_health_check():
    """Smoke test for health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_router_integration():
    """Test that router endpoints are properly loaded and accessible."""
    response = client.get("/api/publish/health")
    assert response.status_code == 200
    assert response.json() == {"status": "publish endpoints available"}

    # Missing body is rejected by validation, so the endpoint exists
    response = client.post("/api/publish/", json={})
    assert response.status_code == 422
