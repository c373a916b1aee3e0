from fastapi.testclient import TestClient

from core.config_loader import config_loader
from main import app, settings

client = TestClient(app)


def test_root() -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": settings.app_name}


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": settings.app_name}


def test_convert() -> None:
    response = client.get("/api/convert", params={"speed": 6.0, "grade": 10.0})
    assert response.status_code == 200
    data = response.json()
    assert data["speed"] == 6.0
    assert data["grade"] == 10.0
    assert abs(data["flat_speed"] - 5.0847) < 1e-4


def test_convert_flat() -> None:
    response = client.get("/api/convert", params={"speed": 7.3})
    assert response.json()["flat_speed"] == 7.3


def test_convert_rejects_negative_speed() -> None:
    response = client.get("/api/convert", params={"speed": -1.0, "grade": 0.0})
    assert response.status_code == 422


def test_convert_rejects_grade_out_of_range() -> None:
    response = client.get("/api/convert", params={"speed": 6.0, "grade": 31.0})
    assert response.status_code == 400
    assert "Invalid grade" in response.json()["detail"]


def test_convert_grade_range_follows_config() -> None:
    config_loader.config.grade_limit = 10.0
    assert client.get("/api/convert", params={"speed": 6.0, "grade": 12.0}).status_code == 400
    response = client.get("/api/convert", params={"speed": 6.0, "grade": -10.0})
    assert response.status_code == 200
    assert response.json()["grade"] == -10.0


def test_lifespan_starts_and_stops_services() -> None:
    with TestClient(app) as lifespan_client:
        assert lifespan_client.get("/health").status_code == 200
        assert lifespan_client.get("/api/session").json()["phase"] == "off"
