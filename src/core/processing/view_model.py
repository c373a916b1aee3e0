"""Projection from session state to what the converter screen shows."""
from core.models.calibration_phase import CalibrationPhase
from core.models.calibration_state import SessionState
from core.models.config_data import configData
from core.models.session_view import CalibrationPrompt, SessionView
from core.processing.calibration import sensor_grade
from core.processing.conversion import flat_speed

_DEFAULT_CONFIG = configData()

CALIBRATION_TITLE = "Calibrate Sensor"
CALIBRATION_CONFIRM = "Calibrate"
CALIBRATION_MESSAGE = (
    "To calibrate incline detection, place your phone securely on the treadmill deck "
    "at 0% incline, then press Calibrate."
)
FALL_DETECTED_MESSAGE = (
    "A fall or sudden movement was detected. Please place your phone on the treadmill "
    "at 0% incline and press Calibrate."
)

STATUS_LABELS = {
    CalibrationPhase.CALIBRATED: "Sensor Grade: ON",
    CalibrationPhase.AWAITING_CALIBRATION: "Sensor Grade: CALIBRATION REQUIRED",
    CalibrationPhase.OFF: "Sensor Grade: OFF",
}

TOGGLE_LABELS = {
    CalibrationPhase.CALIBRATED: "Switch to Manual",
    CalibrationPhase.AWAITING_CALIBRATION: "Cancel Sensor Mode",
    CalibrationPhase.OFF: "Use Sensor",
}


def display_grade(state: SessionState, config: configData = _DEFAULT_CONFIG) -> float:
    """Sensor grade when it is trusted, otherwise the manually entered grade."""
    measured = sensor_grade(state.calibration, config)
    return state.manual_grade if measured is None else measured


def format_input(value: float) -> str:
    # An empty field reads better than "0.0" while typing
    return "" if value == 0.0 else f"{value:.1f}"


def project(state: SessionState, config: configData = _DEFAULT_CONFIG) -> SessionView:
    calibration = state.calibration
    phase = calibration.phase
    grade = display_grade(state, config)
    flat = flat_speed(state.speed, grade, config.incline_factor)

    prompt = None
    if calibration.show_calibration:
        prompt = CalibrationPrompt(
            title=CALIBRATION_TITLE,
            message=FALL_DETECTED_MESSAGE if calibration.fall_detected else CALIBRATION_MESSAGE,
            confirm_label=CALIBRATION_CONFIRM,
        )

    return SessionView(
        speed=state.speed,
        display_grade=grade,
        flat_speed=flat,
        speed_text=format_input(state.speed),
        grade_text=format_input(grade),
        flat_speed_text=f"Equivalent Flat Speed: {flat:.2f} mph",
        phase=phase,
        sensor_active=calibration.sensor_active,
        sensor_status=STATUS_LABELS[phase],
        toggle_label=TOGGLE_LABELS[phase],
        toggle_enabled=not calibration.show_calibration,
        grade_input_enabled=not calibration.sensor_active,
        calibration_prompt=prompt,
    )
