"""Calibration phase enumeration for tracking sensor trust."""
from enum import Enum


class CalibrationPhase(Enum):
    """Enumeration of all possible calibration phases."""
    OFF = "off"  # Manual grade entry
    AWAITING_CALIBRATION = "awaiting_calibration"  # Sensor mode on, grade not trusted
    CALIBRATED = "calibrated"
