def test_health_ok(client):
    """Test that the health check endpoint returns OK."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "OK"


def test_unknown_route_is_json_404(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.get_json() == {"error": "not found"}
