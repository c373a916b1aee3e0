"""Pitch and acceleration magnitude from raw accelerometer axes."""
import math

from core.models.sensor_data import SensorSample


def compute_pitch(sample: SensorSample) -> float:
    """
    Tilt of the device about its lateral axis, in radians.
    Zero when the device lies flat on a level deck.
    """
    return math.atan2(-sample.x, math.sqrt(sample.y * sample.y + sample.z * sample.z))


def acceleration_magnitude(sample: SensorSample) -> float:
    return math.sqrt(sample.x * sample.x + sample.y * sample.y + sample.z * sample.z)
