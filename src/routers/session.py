from fastapi import APIRouter
from dataclasses import asdict
from core.models.session_view import SessionView
from core.services.session_manager import session_manager
from schemas import CalibrationStatusResponse, OrientationInput, TextInput

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=SessionView)
async def get_session() -> SessionView:
    """
    Get everything the converter screen shows for the current session.

    `calibration_prompt` is set while the blocking calibration dialog must be
    displayed; its message depends on whether a fall was detected.
    """
    return session_manager.view()


@router.get("/calibration", response_model=CalibrationStatusResponse)
async def get_calibration_status() -> CalibrationStatusResponse:
    """Raw calibration state, its phase and the sensor grade (null unless calibrated)."""
    state = session_manager.calibration_state
    return CalibrationStatusResponse(
        phase=state.phase,
        sensor_grade=session_manager.sensor_grade(),
        **asdict(state),
    )


@router.put("/speed", response_model=SessionView)
async def set_speed(payload: TextInput) -> SessionView:
    """Set the speed from typed text. Text that is not a number is ignored."""
    session_manager.set_speed(payload.value)
    return session_manager.view()


@router.put("/speed/increment", response_model=SessionView)
async def increment_speed() -> SessionView:
    session_manager.increment_speed()
    return session_manager.view()


@router.put("/speed/decrement", response_model=SessionView)
async def decrement_speed() -> SessionView:
    """Lower the speed by one step; never goes below a single step."""
    session_manager.decrement_speed()
    return session_manager.view()


@router.put("/grade", response_model=SessionView)
async def set_grade(payload: TextInput) -> SessionView:
    """
    Set the manual grade from typed text.
    Ignored when the text is not a number or while the sensor grade is active.
    """
    session_manager.set_grade(payload.value)
    return session_manager.view()


@router.put("/grade/increment", response_model=SessionView)
async def increment_grade() -> SessionView:
    session_manager.increment_grade()
    return session_manager.view()


@router.put("/grade/decrement", response_model=SessionView)
async def decrement_grade() -> SessionView:
    """Lower the manual grade by one step while it is above 0%."""
    session_manager.decrement_grade()
    return session_manager.view()


@router.put("/sensor-mode", response_model=SessionView)
async def toggle_sensor_mode() -> SessionView:
    """
    Toggle sensor mode.

    - **OFF -> AWAITING_CALIBRATION**: sensor grade requested, calibration required.
    - **AWAITING_CALIBRATION / CALIBRATED -> OFF**: back to manual grade, all flags cleared.
    """
    session_manager.toggle_sensor_mode()
    return session_manager.view()


@router.put("/calibrate", response_model=SessionView)
async def confirm_calibration() -> SessionView:
    """
    Confirm the device lies on the deck at 0% incline.
    The current pitch becomes the level reference. Ignored unless calibration is awaited.
    """
    session_manager.confirm_calibration()
    return session_manager.view()


@router.put("/orientation", response_model=SessionView)
async def report_orientation(payload: OrientationInput) -> SessionView:
    """Report the screen orientation. A change while in sensor mode requires recalibration."""
    session_manager.report_orientation(payload.orientation)
    return session_manager.view()


@router.put("/pause", status_code=204)
async def pause_session() -> None:
    """App went to the background: stop consuming sensor samples, keep all state."""
    session_manager.pause()


@router.put("/resume", status_code=204)
async def resume_session() -> None:
    session_manager.resume()
