"""
Calibration / jolt-detection state machine.

`reduce` is a pure function from (state, event) to the next state. Sensor grade
is only trusted in the CALIBRATED phase; a toggle, an orientation change, a
detected jolt or a restart all force the user back through calibration.
"""
import logging
from dataclasses import replace
from typing import Optional

from core.models.calibration_phase import CalibrationPhase
from core.models.calibration_state import CalibrationState
from core.models.config_data import configData
from core.models.events import (
    AppStarted,
    ConfirmCalibration,
    OrientationChanged,
    SampleReceived,
    ToggleSensorMode,
)
from core.processing.conversion import grade_from_pitch
from core.processing.orientation import acceleration_magnitude, compute_pitch

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = configData()


def toggle_sensor_mode(state: CalibrationState) -> CalibrationState:
    if not state.is_sensor_mode:
        # Switching on always requires a fresh calibration
        return replace(state, is_sensor_mode=True, is_calibrated=False, show_calibration=True)
    return replace(
        state,
        is_sensor_mode=False,
        is_calibrated=False,
        show_calibration=False,
        fall_detected=False,
    )


def confirm_calibration(state: CalibrationState) -> CalibrationState:
    if state.phase != CalibrationPhase.AWAITING_CALIBRATION:
        logger.debug(f"Calibration confirmed in phase {state.phase.name}, ignoring")
        return state
    return replace(
        state,
        calibration_pitch=state.latest_pitch,
        is_calibrated=True,
        show_calibration=False,
        fall_detected=False,
    )


def require_calibration(state: CalibrationState, fall_detected: bool = False) -> CalibrationState:
    """Drop back to AWAITING_CALIBRATION. No-op outside sensor mode."""
    if not state.is_sensor_mode:
        return state
    return replace(
        state,
        is_calibrated=False,
        show_calibration=True,
        fall_detected=state.fall_detected or fall_detected,
    )


def apply_sample(state: CalibrationState, event: SampleReceived,
                 config: configData = _DEFAULT_CONFIG) -> CalibrationState:
    sample = event.sample
    pitch = compute_pitch(sample)
    magnitude = acceleration_magnitude(sample)
    state = replace(state, latest_pitch=pitch)

    if not state.sensor_active:
        # Keep the baseline current so the first check after calibrating
        # compares against the device at rest, not against zero.
        return replace(state, last_accel_magnitude=magnitude)

    # At most one jolt check per debounce window; samples inside the window
    # are neither compared nor used as the new baseline.
    if sample.timestamp - state.last_accel_timestamp <= config.debounce_ms:
        return state

    delta = abs(magnitude - state.last_accel_magnitude)
    state = replace(state, last_accel_magnitude=magnitude, last_accel_timestamp=sample.timestamp)
    if delta > config.jolt_threshold:
        logger.warning(f"Jolt detected (Δaccel={delta:.2f} m/s²), calibration required")
        state = require_calibration(state, fall_detected=True)
    return state


def reduce(state: CalibrationState, event,
           config: configData = _DEFAULT_CONFIG) -> CalibrationState:
    """Return the state that follows `event`."""
    if isinstance(event, SampleReceived):
        return apply_sample(state, event, config)
    if isinstance(event, ToggleSensorMode):
        return toggle_sensor_mode(state)
    if isinstance(event, ConfirmCalibration):
        return confirm_calibration(state)
    if isinstance(event, OrientationChanged):
        return require_calibration(state)
    if isinstance(event, AppStarted):
        # Never trust a calibration carried over from a previous run
        return require_calibration(state)
    raise TypeError(f"Unknown calibration event: {event!r}")


def sensor_grade(state: CalibrationState, config: configData = _DEFAULT_CONFIG) -> Optional[float]:
    """Grade (percent) measured by the sensor, or None while it is not trusted."""
    if not state.sensor_active:
        return None
    return grade_from_pitch(state.latest_pitch - state.calibration_pitch, config.grade_limit)
