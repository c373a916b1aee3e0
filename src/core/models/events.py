"""
Discrete events consumed by the calibration reducer.
"""

from dataclasses import dataclass

from core.models.sensor_data import SensorSample


@dataclass(frozen=True)
class ToggleSensorMode:
    pass


@dataclass(frozen=True)
class ConfirmCalibration:
    pass


@dataclass(frozen=True)
class SampleReceived:
    sample: SensorSample


@dataclass(frozen=True)
class OrientationChanged:
    pass


@dataclass(frozen=True)
class AppStarted:
    """Session (re)started; a stale calibration must not be trusted."""
    pass
