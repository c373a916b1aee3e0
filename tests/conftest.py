"""Pytest configuration and fixtures for test suite."""

import math

import pytest
from core.config_loader import config_loader
from core.event_hub import init_event_hub
from core.models.sensor_data import SensorSample
from core.services.sensor_manager import sensor_manager
from core.services.session_manager import session_manager

GRAVITY = 9.80665


@pytest.fixture(autouse=True)
def fresh_session():
    """Start every test from a new manual-mode session listening to samples."""
    init_event_hub(None)
    config_loader.reload_config()
    sensor_manager.latest_sample = None
    sensor_manager.emulated_grade = 0.0
    session_manager.reset()

    yield

    if sensor_manager.running:
        sensor_manager.stop()
    session_manager.reset()


def tilted_sample(grade: float, timestamp: int, magnitude: float = GRAVITY) -> SensorSample:
    """Sample of a device at rest on a deck inclined at `grade` percent."""
    pitch = math.atan(grade / 100.0)
    return SensorSample(x=-magnitude * math.sin(pitch), y=0.0, z=magnitude * math.cos(pitch), timestamp=timestamp)


@pytest.fixture
def calibrated_session():
    """Session in sensor mode, calibrated on a level deck at t=10s."""
    session_manager.toggle_sensor_mode()
    session_manager.handle_sample(tilted_sample(0.0, 10_000))
    session_manager.confirm_calibration()
    return session_manager
