def test_unknown_route_uses_error_body(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "http_error", "message": "Not Found", "status_code": 404}


def test_wrong_method_uses_error_body(client):
    response = client.patch("/api/contributions")

    assert response.status_code == 405
    assert response.json()["error"] == "http_error"
    assert response.json()["status_code"] == 405
    assert "GET" in response.headers["allow"]
