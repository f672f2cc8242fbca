"""HTTP client for the weather proxy's /api endpoints."""

import logging

import httpx

from weathertwin.config.defaults import (
    DASHBOARD_LATITUDE,
    DASHBOARD_LOCATION_NAME,
    DASHBOARD_LONGITUDE,
)
from weathertwin.config.schema import LocationConfig
from weathertwin.models.common import format_coordinate
from weathertwin.models.weather import HistoricalSeries, WeatherReading

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api"


class TemperatureApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        location: LocationConfig | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.location = location or LocationConfig(
            latitude=DASHBOARD_LATITUDE,
            longitude=DASHBOARD_LONGITUDE,
            name=DASHBOARD_LOCATION_NAME,
        )
        self.timeout = timeout

    def default_location(self) -> LocationConfig:
        return self.location

    def get_realtime(self, latitude: float, longitude: float) -> WeatherReading:
        payload = self._get(
            "/realtime", {"latitude": latitude, "longitude": longitude}
        )
        return WeatherReading.from_payload(payload)

    def get_historical(
        self, latitude: float, longitude: float, start_date: str, end_date: str
    ) -> HistoricalSeries:
        payload = self._get(
            "/historical",
            {
                "latitude": latitude,
                "longitude": longitude,
                "start_date": start_date,
                "end_date": end_date,
            },
        )
        _require_object(payload, "data", "/historical")
        return HistoricalSeries.from_payload(payload)

    def get_combined(
        self, latitude: float, longitude: float, start_date: str, end_date: str
    ) -> tuple[WeatherReading, HistoricalSeries]:
        payload = self._get(
            "/combined",
            {
                "latitude": latitude,
                "longitude": longitude,
                "start_date": start_date,
                "end_date": end_date,
            },
        )
        realtime = _require_object(payload, "realtime", "/combined")
        historical = _require_object(payload, "historical", "/combined")
        _require_object(historical, "data", "/combined")
        return (
            WeatherReading.from_payload(realtime),
            HistoricalSeries.from_payload(historical),
        )

    def _get(self, path: str, params: dict) -> dict:
        url = f"{self.base_url}{path}"
        query = {
            k: format_coordinate(v) if isinstance(v, float) else v
            for k, v in params.items()
        }
        try:
            resp = httpx.get(url, params=query, timeout=self.timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Proxy error for %s: %s", path, e)
            raise
        except httpx.RequestError as e:
            logger.error("Proxy request failed for %s: %s", path, e)
            raise

        try:
            payload = resp.json()
        except ValueError as e:
            logger.error("Proxy returned invalid JSON for %s: %s", path, e)
            raise httpx.DecodingError(
                f"Invalid JSON from proxy: {e}", request=resp.request
            ) from e
        if not isinstance(payload, dict):
            logger.error(
                "Proxy returned %s for %s, expected an object",
                type(payload).__name__, path,
            )
            raise httpx.DecodingError(
                "Unexpected proxy payload: expected a JSON object",
                request=resp.request,
            )
        return payload


def _require_object(payload: dict, key: str, path: str) -> dict:
    """Return ``payload[key]``, which must be a JSON object when present."""
    value = payload.get(key) or {}
    if not isinstance(value, dict):
        logger.error("Proxy returned a non-object '%s' for %s", key, path)
        raise httpx.DecodingError(
            f"Unexpected proxy payload: '{key}' is not a JSON object"
        )
    return value
