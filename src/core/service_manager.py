# External libs
import asyncio
import logging

# Internal libs
from core.event_hub import init_event_hub
from core.services.sensor_manager import sensor_manager
from core.services.session_manager import session_manager

logger = logging.getLogger(__name__)

class ServiceManager:

    def __init__(self):
        self.running = False

    async def start_services(self, emulation: bool = True):
        """Start global background services if not already started.
        Args:
            emulation: When True, feed the session from the emulated accelerometer.
                Otherwise samples are expected on POST /api/sensor/sample.
        """
        if self.running:
            return

        logger.info("Starting background services...")
        loop = asyncio.get_running_loop()

        # Init Event Hub
        init_event_hub(loop)

        # A restarted session never keeps trusting an old calibration
        session_manager.resume()
        session_manager.start()

        # Sensor Manager
        sensor_manager.start(emulation=emulation)

        self.running = True
        logger.info("Background services started.")

    def stop_services(self):
        """Stop background services."""
        self.running = False

        sensor_manager.stop()
        session_manager.pause()
        init_event_hub(None)

        logger.info("Background services stopped.")

service_manager = ServiceManager()
