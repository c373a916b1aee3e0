from fastapi import APIRouter, HTTPException, Query
from core.config_loader import config_loader
from core.processing.conversion import flat_speed
from schemas import ConversionResponse

router = APIRouter(prefix="/convert", tags=["convert"])


@router.get("", response_model=ConversionResponse, responses={
    400: {
        "description": "Grade outside the configured grade limit.",
        "content": {
            "application/json": {
                "example": {"detail": "Invalid grade: 31.0. Allowed range is [-30.0, 30.0]"}
            }
        }
    }
})
async def convert(speed: float = Query(ge=0.0), grade: float = 0.0) -> ConversionResponse:
    """
    Equivalent flat-ground speed for a treadmill speed and grade (percent).
    Units of `flat_speed` follow the units of `speed`.
    """
    limit = config_loader.get_grade_limit()
    if abs(grade) > limit:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid grade: {grade}. Allowed range is [{-limit}, {limit}]"
        )

    return ConversionResponse(
        speed=speed,
        grade=grade,
        flat_speed=flat_speed(speed, grade, config_loader.get_incline_factor()),
    )
