"""Fixed-interval poller feeding live readings to the scene and listeners."""

import logging
import time
from collections.abc import Callable

import httpx

from weathertwin.dashboard.api_client import TemperatureApiClient
from weathertwin.dashboard.scene import WeatherScene
from weathertwin.models.weather import WeatherReading

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0

ReadingListener = Callable[[WeatherReading], None]


class DashboardPoller:
    """Fetches the real-time reading every ``interval`` seconds.

    Each poll completes before the next one starts. A failed poll is logged
    and the loop carries on at the normal interval.
    """

    def __init__(
        self,
        api: TemperatureApiClient,
        scene: WeatherScene | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.api = api
        self.scene = scene
        self.interval = interval
        self._listeners: list[ReadingListener] = []
        self._running = False
        self.total_polls = 0
        self.total_failures = 0
        self.last_reading: WeatherReading | None = None

    def add_listener(self, listener: ReadingListener) -> None:
        self._listeners.append(listener)

    def poll_once(self) -> WeatherReading | None:
        """Run a single poll. Returns the reading, or None on failure."""
        self.total_polls += 1
        location = self.api.default_location()
        try:
            reading = self.api.get_realtime(location.latitude, location.longitude)
        except httpx.HTTPError as e:
            self.total_failures += 1
            logger.warning("Poll #%d failed: %s", self.total_polls, e)
            return None

        self.last_reading = reading
        if self.scene is not None:
            self.scene.apply_weather(reading.temperature, reading.humidity)
        for listener in self._listeners:
            listener(reading)
        return reading

    def run(self, max_polls: int | None = None) -> None:
        """Poll until stop() is called or ``max_polls`` polls have run."""
        self._running = True
        polls = 0
        logger.info("Poller started, interval=%.1fs", self.interval)
        try:
            while self._running:
                started = time.monotonic()
                self.poll_once()
                polls += 1
                if max_polls is not None and polls >= max_polls:
                    break
                remaining = max(0.0, self.interval - (time.monotonic() - started))
                time.sleep(remaining)
        finally:
            self._running = False
            logger.info(
                "Poller stopped after %d polls (%d failed)",
                self.total_polls, self.total_failures,
            )

    def stop(self) -> None:
        self._running = False
