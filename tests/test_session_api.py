"""
Tests for the /api/session endpoints.
"""
from fastapi.testclient import TestClient

from main import app
from core.services.session_manager import session_manager

client = TestClient(app)


def push(x: float, y: float, z: float, timestamp: int):
    return client.post("/api/sensor/sample", json={"x": x, "y": y, "z": z, "timestamp": timestamp})


class TestSessionView:
    """Test GET /api/session"""

    def test_initial_view(self) -> None:
        response = client.get("/api/session")
        assert response.status_code == 200
        data = response.json()
        assert data["speed"] == 6.0
        assert data["display_grade"] == 0.0
        assert data["flat_speed"] == 6.0
        assert data["phase"] == "off"
        assert data["sensor_status"] == "Sensor Grade: OFF"
        assert data["toggle_label"] == "Use Sensor"
        assert data["calibration_prompt"] is None

    def test_calibration_status(self) -> None:
        response = client.get("/api/session/calibration")
        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "off"
        assert data["is_sensor_mode"] is False
        assert data["sensor_grade"] is None


class TestManualInputs:
    """Test speed/grade endpoints"""

    def test_set_speed_and_grade(self) -> None:
        client.put("/api/session/speed", json={"value": "6"})
        response = client.put("/api/session/grade", json={"value": "10"})
        assert response.status_code == 200
        data = response.json()
        assert abs(data["flat_speed"] - 5.0847) < 1e-4
        assert data["flat_speed_text"] == "Equivalent Flat Speed: 5.08 mph"

    def test_invalid_text_is_ignored(self) -> None:
        client.put("/api/session/speed", json={"value": "7.5"})
        response = client.put("/api/session/speed", json={"value": "seven"})
        assert response.status_code == 200
        assert response.json()["speed"] == 7.5

    def test_missing_value_is_rejected(self) -> None:
        response = client.put("/api/session/speed", json={})
        assert response.status_code == 422

    def test_steps(self) -> None:
        client.put("/api/session/speed/increment")
        client.put("/api/session/grade/increment")
        client.put("/api/session/grade/increment")
        response = client.put("/api/session/grade/decrement")
        data = response.json()
        assert data["speed"] == 6.1
        assert data["display_grade"] == 0.5
        response = client.put("/api/session/speed/decrement")
        assert response.json()["speed"] == 6.0


class TestSensorModeFlow:
    """Test toggle, calibrate, jolt and orientation through the API"""

    def test_toggle_on_requires_calibration(self) -> None:
        response = client.put("/api/session/sensor-mode")
        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "awaiting_calibration"
        assert data["sensor_status"] == "Sensor Grade: CALIBRATION REQUIRED"
        assert data["toggle_enabled"] is False
        assert data["calibration_prompt"]["title"] == "Calibrate Sensor"

    def test_full_flow(self) -> None:
        client.put("/api/session/sensor-mode")
        assert push(0.0, 0.0, 9.81, 10_000).status_code == 204

        data = client.put("/api/session/calibrate").json()
        assert data["phase"] == "calibrated"
        assert data["sensor_status"] == "Sensor Grade: ON"
        assert data["grade_input_enabled"] is False
        assert data["display_grade"] == 0.0

        # Deck raised to 5%: x = -g*sin(atan(0.05)), z = g*cos(atan(0.05))
        push(-0.48988, 0.0, 9.79776, 10_100)
        data = client.get("/api/session").json()
        assert abs(data["display_grade"] - 5.0) < 0.01

        # Phone knocked off the deck
        push(0.0, 0.0, 25.0, 10_700)
        data = client.get("/api/session").json()
        assert data["phase"] == "awaiting_calibration"
        assert data["calibration_prompt"]["message"].startswith("A fall or sudden movement")

        status = client.get("/api/session/calibration").json()
        assert status["fall_detected"] is True
        assert status["sensor_grade"] is None

    def test_toggle_off_resets(self) -> None:
        client.put("/api/session/sensor-mode")
        data = client.put("/api/session/sensor-mode").json()
        assert data["phase"] == "off"
        status = client.get("/api/session/calibration").json()
        for flag in ("is_sensor_mode", "is_calibrated", "show_calibration", "fall_detected"):
            assert status[flag] is False

    def test_calibrate_when_off_is_ignored(self) -> None:
        response = client.put("/api/session/calibrate")
        assert response.status_code == 200
        assert response.json()["phase"] == "off"

    def test_orientation_change(self) -> None:
        client.put("/api/session/sensor-mode")
        client.put("/api/session/calibrate")
        client.put("/api/session/orientation", json={"orientation": "portrait"})
        data = client.put("/api/session/orientation", json={"orientation": "landscape"}).json()
        assert data["phase"] == "awaiting_calibration"
        assert data["calibration_prompt"]["message"].startswith("To calibrate incline detection")

    def test_invalid_orientation(self) -> None:
        response = client.put("/api/session/orientation", json={"orientation": "upside_down"})
        assert response.status_code == 422


class TestPauseResume:
    """Test PUT /api/session/pause and /resume"""

    def test_paused_session_rejects_samples(self) -> None:
        assert client.put("/api/session/pause").status_code == 204
        response = push(0.0, 0.0, 9.81, 1_000)
        assert response.status_code == 409
        assert response.json()["detail"] == "Session is paused"

    def test_resume_accepts_samples(self) -> None:
        client.put("/api/session/pause")
        assert client.put("/api/session/resume").status_code == 204
        assert push(0.0, 0.0, 9.81, 1_000).status_code == 204
        assert session_manager.is_paused is False

    def test_pause_keeps_calibration_requirement(self) -> None:
        client.put("/api/session/sensor-mode")
        client.put("/api/session/pause")
        client.put("/api/session/resume")
        assert client.get("/api/session").json()["phase"] == "awaiting_calibration"
