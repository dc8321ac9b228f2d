from flask.testing import FlaskClient


def test_ping_returns_pong(client: FlaskClient):
    response = client.get("/api/ping")

    assert response.status_code == 200
    assert response.json == {"message": "pong"}


def test_unknown_route_returns_json_404(client: FlaskClient):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert "error" in response.json
