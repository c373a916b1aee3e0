"""
Accelerometer sample model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SensorSample:
    """
    Data class representing a single accelerometer reading.
    Axes are in m/s², timestamp is monotonic milliseconds.
    """
    x: float
    y: float
    z: float
    timestamp: int
