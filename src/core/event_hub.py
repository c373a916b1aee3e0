import asyncio
import inspect
import logging
from typing import Callable, Dict, List, Any, Optional

logger = logging.getLogger(__name__)

# Topics
SENSOR_SAMPLE = "sensor_sample"        # SensorSample from any sample source
SESSION_UPDATED = "session_updated"    # SessionState after every dispatched event
PHASE_CHANGED = "phase_changed"        # (old CalibrationPhase, new CalibrationPhase)


class EventHub:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def init(self, loop: Optional[asyncio.AbstractEventLoop]):
        self._loop = loop

    def subscribe(self, topic: str, handler: Callable):
        handlers = self._subscribers.setdefault(topic, [])
        if handler not in handlers:
            handlers.append(handler)
        logger.debug(f"Subscribed to {topic}")

    def unsubscribe(self, topic: str, handler: Callable):
        if handler in self._subscribers.get(topic, []):
            self._subscribers[topic].remove(handler)
            logger.debug(f"Unsubscribed from {topic}")

    def is_subscribed(self, topic: str, handler: Callable) -> bool:
        return handler in self._subscribers.get(topic, [])

    def send_all_on_topic(self, topic: str, message: Any):
        # Copy so handlers may unsubscribe while being called
        handlers = self._subscribers.get(topic, [])[:]
        for handler in handlers:
            try:
                self._dispatch(handler, topic, message)
            except Exception as e:
                logger.error(f"Error handling message on topic {topic}: {e}")

    def _dispatch(self, handler: Callable, topic: str, message: Any):
        is_async = inspect.iscoroutinefunction(handler)
        if self._loop is None or self._loop.is_closed():
            if is_async:
                logger.warning(f"EventHub loop not initialized. Cannot dispatch async handler for {topic}")
            else:
                handler(topic, message)
            return

        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if current_loop is self._loop:
            if is_async:
                self._loop.create_task(handler(topic, message))
            else:
                handler(topic, message)
        elif is_async:
            # Called from another thread (e.g. the emulation thread)
            asyncio.run_coroutine_threadsafe(handler(topic, message), self._loop)
        else:
            # Sync handlers run in the caller's thread; the session serialises itself
            handler(topic, message)


# Global instance
event_hub = EventHub()

def init_event_hub(loop):
    """Initialize the global event hub with the given loop."""
    event_hub.init(loop)
