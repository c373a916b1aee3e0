from typing import Optional

from pydantic.dataclasses import dataclass

from core.models.calibration_phase import CalibrationPhase


@dataclass
class CalibrationPrompt:
    """
    Blocking calibration dialog content.
    Compatible with both dataclass operations and Pydantic validation.
    """
    title: str
    message: str
    confirm_label: str


@dataclass
class SessionView:
    """
    Everything the converter screen renders for one session state.
    Compatible with both dataclass operations and Pydantic validation.
    """
    speed: float
    display_grade: float
    flat_speed: float
    speed_text: str
    grade_text: str
    flat_speed_text: str
    phase: CalibrationPhase
    sensor_active: bool
    sensor_status: str
    toggle_label: str
    toggle_enabled: bool
    grade_input_enabled: bool
    calibration_prompt: Optional[CalibrationPrompt] = None
