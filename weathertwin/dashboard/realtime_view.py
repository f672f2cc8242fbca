"""Live reading view: one real-time fetch for the dashboard location."""

import logging

import httpx

from weathertwin.dashboard.api_client import TemperatureApiClient
from weathertwin.dashboard.formatters import format_value
from weathertwin.models.weather import WeatherReading

logger = logging.getLogger(__name__)


class RealtimeView:
    def __init__(self, api: TemperatureApiClient):
        self.api = api
        self.reading: WeatherReading | None = None
        self.loading = True
        self.error: str | None = None

    def load(self) -> WeatherReading | None:
        location = self.api.default_location()
        self.loading = True
        try:
            self.reading = self.api.get_realtime(location.latitude, location.longitude)
            self.error = None
        except httpx.HTTPError as e:
            logger.error("Error fetching real-time data: %s", e)
            self.error = str(e)
        finally:
            self.loading = False
        return self.reading

    def render(self) -> str:
        if self.loading:
            return "Loading real-time data..."
        if self.reading is None:
            return "No real-time data available"
        units = self.reading.units
        return "\n".join([
            f"Time: {self.reading.timestamp}",
            f"Temperature: {format_value(self.reading.temperature)} "
            f"{units.get('temperature_2m', '°C')}",
            f"Humidity: {format_value(self.reading.humidity)} "
            f"{units.get('relative_humidity_2m', '%')}",
        ])
