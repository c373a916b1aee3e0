from fastapi import APIRouter, HTTPException
import math
from core.config_loader import config_loader
from core.processing.orientation import acceleration_magnitude, compute_pitch
from core.models.sensor_data import SensorSample
from core.services.sensor_manager import sensor_manager, monotonic_ms
from core.services.session_manager import session_manager

from schemas import EmulatedGradeInput, OrientationReading, SampleInput

router = APIRouter(prefix="/sensor", tags=["sensor"])


@router.post("/sample", status_code=204, responses={
    409: {
        "description": "The session is paused, or the emulated accelerometer is feeding it.",
        "content": {
            "application/json": {
                "examples": {
                    "paused": {"value": {"detail": "Session is paused"}},
                    "emulation": {"value": {"detail": "Emulation is running"}}
                }
            }
        }
    }
})
async def push_sample(payload: SampleInput) -> None:
    """
    Push one accelerometer reading (m/s²) from a device.
    Timestamp is monotonic milliseconds; the server's clock is used when omitted.
    Rejected while emulation runs, so the session only ever sees one sample source.
    """
    if session_manager.is_paused:
        raise HTTPException(status_code=409, detail="Session is paused")
    if sensor_manager.running and sensor_manager.emulation_mode:
        raise HTTPException(status_code=409, detail="Emulation is running")

    timestamp = payload.timestamp if payload.timestamp is not None else monotonic_ms()
    sensor_manager.push(SensorSample(x=payload.x, y=payload.y, z=payload.z, timestamp=timestamp))


@router.get("/orientation", response_model=OrientationReading, responses={
    404: {
        "description": "No sample has been received yet.",
        "content": {
            "application/json": {
                "example": {"detail": "No sensor sample received yet"}
            }
        }
    }
})
async def get_orientation() -> OrientationReading:
    """Pitch and acceleration magnitude of the latest sample."""
    sample = sensor_manager.latest_sample
    if sample is None:
        raise HTTPException(status_code=404, detail="No sensor sample received yet")

    pitch = compute_pitch(sample)
    return OrientationReading(
        pitch_rad=pitch,
        pitch_deg=math.degrees(pitch),
        magnitude=acceleration_magnitude(sample),
        timestamp=sample.timestamp,
    )


@router.put("/emulation/grade", status_code=204, responses={
    400: {
        "description": "Grade outside the configured grade limit.",
        "content": {
            "application/json": {
                "example": {"detail": "Invalid grade: 45.0. Allowed range is [-30.0, 30.0]"}
            }
        }
    },
    409: {
        "description": "The emulated accelerometer is not running.",
        "content": {
            "application/json": {
                "example": {"detail": "Emulation is not running"}
            }
        }
    }
})
async def set_emulated_grade(payload: EmulatedGradeInput) -> None:
    """Tilt the emulated treadmill deck."""
    limit = config_loader.get_grade_limit()
    if abs(payload.grade) > limit:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid grade: {payload.grade}. Allowed range is [{-limit}, {limit}]"
        )
    if not (sensor_manager.running and sensor_manager.emulation_mode):
        raise HTTPException(status_code=409, detail="Emulation is not running")
    sensor_manager.set_emulated_grade(payload.grade)
