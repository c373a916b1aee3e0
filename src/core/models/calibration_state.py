"""
Calibration and session state models.
"""

from dataclasses import dataclass, field
from typing import Optional

from core.models.calibration_phase import CalibrationPhase
from core.models.orientation import Orientation


@dataclass(frozen=True)
class CalibrationState:
    """
    State of the incline sensor calibration.

    Never mutated in place: each transition returns a new instance.
    """
    is_sensor_mode: bool = False
    is_calibrated: bool = False
    show_calibration: bool = False
    fall_detected: bool = False
    calibration_pitch: float = 0.0
    latest_pitch: float = 0.0
    last_accel_magnitude: float = 0.0
    last_accel_timestamp: int = 0

    @property
    def phase(self) -> CalibrationPhase:
        if not self.is_sensor_mode:
            return CalibrationPhase.OFF
        if self.is_calibrated:
            return CalibrationPhase.CALIBRATED
        return CalibrationPhase.AWAITING_CALIBRATION

    @property
    def sensor_active(self) -> bool:
        """True when the sensor-derived grade is trusted."""
        return self.is_sensor_mode and self.is_calibrated


@dataclass(frozen=True)
class SessionState:
    """Everything the converter screen is bound to."""
    speed: float = 6.0
    manual_grade: float = 0.0
    orientation: Optional[Orientation] = None
    calibration: CalibrationState = field(default_factory=CalibrationState)
