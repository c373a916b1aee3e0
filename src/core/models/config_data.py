from dataclasses import dataclass


@dataclass
class configData:
    emulation: bool = True
    # Fall / jolt detection
    jolt_threshold: float = 8.0  # m/s²
    debounce_ms: int = 500
    # Grade and conversion
    grade_limit: float = 30.0  # percent, symmetric clamp
    incline_factor: float = 1.8
    # Input steps
    speed_step: float = 0.1
    grade_step: float = 0.5
    default_speed: float = 6.0  # mph
    # Emulated accelerometer
    emulation_rate_hz: float = 20.0
