import threading
import time
import logging
import math
import random
from typing import Iterable, Optional

from core.config_loader import config_loader
from core.event_hub import event_hub, SENSOR_SAMPLE
from core.models.sensor_data import SensorSample

logger = logging.getLogger(__name__)

STANDARD_GRAVITY = 9.80665  # m/s²


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def sample_for_grade(grade: float, timestamp: int, noise: float = 0.0) -> SensorSample:
    """Reading of a device lying on a deck inclined at `grade` percent."""
    pitch = math.atan(grade / 100.0)
    return SensorSample(
        x=-STANDARD_GRAVITY * math.sin(pitch) + random.uniform(-noise, noise),
        y=random.uniform(-noise, noise),
        z=STANDARD_GRAVITY * math.cos(pitch) + random.uniform(-noise, noise),
        timestamp=timestamp,
    )


class SensorManager:
    """
    Accelerometer sample sources, published on the event hub.

    Samples come from the emulation thread, from an injected iterable
    (deterministic sequences for tests and replays) or one at a time
    from a device pushing readings to the API.
    """
    def __init__(self):
        self.running = False
        self.emulation_mode = False
        self.emulated_grade = 0.0
        self.emulation_noise = 0.05
        self.latest_sample: Optional[SensorSample] = None
        self._thread: Optional[threading.Thread] = None

    def start(self, emulation=False):
        """Start sample acquisition. Outside emulation, samples must be pushed."""
        if self.running:
            if self.emulation_mode != emulation:
                self.stop()
            else:
                return

        self.emulation_mode = emulation
        self.running = True
        logger.info(f"SensorManager started (Emulation: {emulation})")

        if self.emulation_mode:
            self._thread = threading.Thread(target=self._loop, daemon=True)
            self._thread.start()

    def stop(self):
        """Stop sample acquisition."""
        self.running = False
        if self._thread:
            self._thread.join()
            self._thread = None
        logger.info("SensorManager stopped")

    def set_emulated_grade(self, grade: float):
        self.emulated_grade = grade
        logger.info(f"Emulated deck grade set to {grade:.1f}%")

    def _loop(self):
        interval = 1.0 / config_loader.config.emulation_rate_hz
        while self.running:
            self.push(sample_for_grade(self.emulated_grade, monotonic_ms(), self.emulation_noise))
            time.sleep(interval)

    def feed(self, samples: Iterable[SensorSample]) -> int:
        """Publish every sample from `samples` in order. Returns how many were sent."""
        count = 0
        for sample in samples:
            self.push(sample)
            count += 1
        return count

    def push(self, sample: SensorSample):
        self.latest_sample = sample
        event_hub.send_all_on_topic(SENSOR_SAMPLE, sample)


# Global instance
sensor_manager = SensorManager()
