"""Incline to flat-ground speed conversion."""
import math

# Each percent of grade costs about 1.8% of flat-ground speed
INCLINE_FACTOR = 1.8
GRADE_LIMIT = 30.0


def flat_speed(speed: float, grade: float, incline_factor: float = INCLINE_FACTOR) -> float:
    """Equivalent flat-ground speed for a treadmill `speed` at `grade` percent."""
    return speed / (1 + (grade / 100.0) * incline_factor)


def clamp_grade(grade: float, limit: float = GRADE_LIMIT) -> float:
    return max(-limit, min(limit, grade))


def grade_from_pitch(relative_pitch: float, limit: float = GRADE_LIMIT) -> float:
    """Grade in percent for a pitch (radians) measured against the level reference."""
    return clamp_grade(math.tan(relative_pitch) * 100.0, limit)
