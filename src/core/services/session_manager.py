import logging
import math
import threading
from dataclasses import replace
from typing import Optional

from core.config_loader import config_loader
from core.event_hub import event_hub, SENSOR_SAMPLE, SESSION_UPDATED, PHASE_CHANGED
from core.models.calibration_phase import CalibrationPhase
from core.models.calibration_state import CalibrationState, SessionState
from core.models.events import (
    AppStarted,
    ConfirmCalibration,
    OrientationChanged,
    SampleReceived,
    ToggleSensorMode,
)
from core.models.orientation import Orientation
from core.models.sensor_data import SensorSample
from core.models.session_view import SessionView
from core.processing import calibration
from core.processing.conversion import clamp_grade
from core.processing.view_model import display_grade, project

logger = logging.getLogger(__name__)

# Keeps repeated +/- steps from accumulating float noise (6.1000000000000005)
STEP_PRECISION = 6


def parse_number(text: str) -> Optional[float]:
    """Parse user text as a finite number, or None if it is not one."""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


class SessionManager:
    """
    Owns the single converter session.

    Every input (user action or accelerometer sample) is applied as one
    serialised step, so the emulation thread and request handlers never
    interleave halfway through a transition.
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._state = SessionState(speed=config_loader.config.default_speed)
        self.is_paused = False
        event_hub.subscribe(SENSOR_SAMPLE, self._on_sample)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def calibration_state(self) -> CalibrationState:
        return self._state.calibration

    @property
    def phase(self) -> CalibrationPhase:
        return self._state.calibration.phase

    def reset(self, state: Optional[SessionState] = None):
        """Replace the session, e.g. when resuming a saved one or between tests."""
        with self._lock:
            self._state = state or SessionState(speed=config_loader.config.default_speed)
        self.resume()

    def view(self) -> SessionView:
        return project(self._state, config_loader.config)

    def sensor_grade(self) -> Optional[float]:
        return calibration.sensor_grade(self._state.calibration, config_loader.config)

    # Calibration events

    def dispatch(self, event) -> SessionState:
        """Apply a calibration event and publish the resulting session."""
        with self._lock:
            old_phase = self._state.calibration.phase
            new_calibration = calibration.reduce(self._state.calibration, event, config_loader.config)
            self._state = replace(self._state, calibration=new_calibration)
            state = self._state

        if state.calibration.phase != old_phase:
            logger.info(f"Calibration phase {old_phase.name} -> {state.calibration.phase.name}")
            event_hub.send_all_on_topic(PHASE_CHANGED, (old_phase, state.calibration.phase))
        event_hub.send_all_on_topic(SESSION_UPDATED, state)
        return state

    def start(self) -> SessionState:
        """Session (re)start: a saved sensor session must be recalibrated."""
        return self.dispatch(AppStarted())

    def toggle_sensor_mode(self) -> SessionState:
        return self.dispatch(ToggleSensorMode())

    def confirm_calibration(self) -> SessionState:
        return self.dispatch(ConfirmCalibration())

    def handle_sample(self, sample: SensorSample) -> SessionState:
        return self.dispatch(SampleReceived(sample))

    def report_orientation(self, orientation: Orientation) -> SessionState:
        """Record the screen orientation; a change invalidates the calibration."""
        with self._lock:
            previous = self._state.orientation
            self._state = replace(self._state, orientation=orientation)
        if previous is not None and previous != orientation:
            logger.info(f"Orientation changed {previous.name} -> {orientation.name}")
            return self.dispatch(OrientationChanged())
        return self._state

    # Manual inputs

    def _update(self, **changes) -> SessionState:
        with self._lock:
            self._state = replace(self._state, **changes)
            state = self._state
        event_hub.send_all_on_topic(SESSION_UPDATED, state)
        return state

    def set_speed(self, text: str) -> SessionState:
        value = parse_number(text)
        if value is None:
            logger.debug(f"Ignoring invalid speed input {text!r}")
            return self._state
        if value < 0.0:
            logger.debug(f"Ignoring negative speed input {text!r}")
            return self._state
        return self._update(speed=value)

    def set_grade(self, text: str) -> SessionState:
        if self._state.calibration.sensor_active:
            logger.debug("Grade input disabled while sensor grade is active")
            return self._state
        value = parse_number(text)
        if value is None:
            logger.debug(f"Ignoring invalid grade input {text!r}")
            return self._state
        return self._update(manual_grade=clamp_grade(value, config_loader.get_grade_limit()))

    def increment_speed(self) -> SessionState:
        step = config_loader.config.speed_step
        return self._update(speed=round(self._state.speed + step, STEP_PRECISION))

    def decrement_speed(self) -> SessionState:
        step = config_loader.config.speed_step
        if self._state.speed <= step:
            return self._state
        return self._update(speed=round(self._state.speed - step, STEP_PRECISION))

    def increment_grade(self) -> SessionState:
        if self._state.calibration.sensor_active:
            return self._state
        step = config_loader.config.grade_step
        grade = round(self._state.manual_grade + step, STEP_PRECISION)
        return self._update(manual_grade=clamp_grade(grade, config_loader.get_grade_limit()))

    def decrement_grade(self) -> SessionState:
        state = self._state
        if state.calibration.sensor_active or display_grade(state, config_loader.config) <= 0.0:
            return state
        step = config_loader.config.grade_step
        return self._update(manual_grade=round(state.manual_grade - step, STEP_PRECISION))

    # Foreground lifecycle

    def pause(self):
        """Stop listening to samples. Calibration state is kept as is."""
        if not self.is_paused:
            event_hub.unsubscribe(SENSOR_SAMPLE, self._on_sample)
            self.is_paused = True
            logger.info("Session paused, sensor updates unsubscribed")

    def resume(self):
        if self.is_paused or not event_hub.is_subscribed(SENSOR_SAMPLE, self._on_sample):
            event_hub.subscribe(SENSOR_SAMPLE, self._on_sample)
            self.is_paused = False
            logger.info("Session resumed, sensor updates subscribed")

    def _on_sample(self, topic: str, sample: SensorSample):
        self.handle_sample(sample)


# Global instance
session_manager = SessionManager()
