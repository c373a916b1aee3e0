from typing import Optional
from pydantic import BaseModel
from core.models.calibration_phase import CalibrationPhase
from core.models.orientation import Orientation


class AppHealthOK(BaseModel):
    status: str
    app: str


class TextInput(BaseModel):
    # Raw text as typed; unparsable values are ignored by the session
    value: str


class OrientationInput(BaseModel):
    orientation: Orientation


class SampleInput(BaseModel):
    x: float
    y: float
    z: float
    # Monotonic milliseconds; server arrival time when omitted
    timestamp: Optional[int] = None


class CalibrationStatusResponse(BaseModel):
    phase: CalibrationPhase
    is_sensor_mode: bool
    is_calibrated: bool
    show_calibration: bool
    fall_detected: bool
    calibration_pitch: float
    latest_pitch: float
    last_accel_magnitude: float
    last_accel_timestamp: int
    sensor_grade: Optional[float] = None


class OrientationReading(BaseModel):
    pitch_rad: float
    pitch_deg: float
    magnitude: float
    timestamp: int


class ConversionResponse(BaseModel):
    speed: float
    grade: float
    flat_speed: float


class EmulatedGradeInput(BaseModel):
    grade: float
