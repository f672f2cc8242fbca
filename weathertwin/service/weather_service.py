"""Weather service: parameter handling, caching and shaping of upstream data."""

import logging

import httpx

from weathertwin.cache.response_cache import (
    ResponseCache,
    historical_key,
    realtime_key,
)
from weathertwin.config.schema import CacheConfig, LocationConfig
from weathertwin.ingest.openmeteo_client import OpenMeteoClient
from weathertwin.models.common import format_coordinate, utc_now_iso

logger = logging.getLogger(__name__)

UPSTREAM_NAME = "Open-Meteo"


class MissingParametersError(ValueError):
    """A required query parameter was absent or empty."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required parameters: {', '.join(missing)}")


class UpstreamError(RuntimeError):
    """The upstream API failed or returned an unexpected payload."""


class WeatherService:
    def __init__(
        self,
        client: OpenMeteoClient,
        cache: ResponseCache,
        default_location: LocationConfig,
        cache_config: CacheConfig | None = None,
    ):
        self.client = client
        self.cache = cache
        self.default_location = default_location
        self.cache_config = cache_config or CacheConfig()

    def realtime(
        self, latitude: str | None = None, longitude: str | None = None
    ) -> dict:
        """Current temperature and humidity, cached for the real-time TTL."""
        lat, lon = self._coordinates(latitude, longitude)
        key = realtime_key(lat, lon)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        raw = self._call(self.client.get_current, lat, lon)
        current = raw.get("current")
        if not isinstance(current, dict):
            raise UpstreamError("Unexpected upstream payload: missing 'current'")

        result = {
            "timestamp": utc_now_iso(),
            "temperature": current.get("temperature_2m"),
            "humidity": current.get("relative_humidity_2m"),
            "units": raw.get("current_units"),
        }
        self.cache.set(key, result, self.cache_config.realtime_ttl_seconds)
        logger.info("Fetched real-time data for %s,%s", lat, lon)
        return result

    def historical(
        self,
        latitude: str | None = None,
        longitude: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> dict:
        """Hourly series for a date range, cached for the historical TTL."""
        start_date, end_date = require_date_range(start_date, end_date)
        lat, lon = self._coordinates(latitude, longitude)
        key = historical_key(lat, lon, start_date, end_date)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        raw = self._call(self.client.get_archive, lat, lon, start_date, end_date)
        hourly = raw.get("hourly")
        if not isinstance(hourly, dict):
            raise UpstreamError("Unexpected upstream payload: missing 'hourly'")

        result = {"data": hourly, "units": raw.get("hourly_units")}
        self.cache.set(key, result, self.cache_config.historical_ttl_seconds)
        logger.info(
            "Fetched historical data for %s,%s %s..%s",
            lat, lon, start_date, end_date,
        )
        return result

    def combined(
        self,
        latitude: str | None = None,
        longitude: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> dict:
        """Real-time and historical data for the same query in one body."""
        require_date_range(start_date, end_date)
        return {
            "realtime": self.realtime(latitude, longitude),
            "historical": self.historical(latitude, longitude, start_date, end_date),
        }

    def health(self) -> dict:
        return {
            "status": "operational",
            "timestamp": utc_now_iso(),
            "services": {
                "realtime": UPSTREAM_NAME,
                "historical": UPSTREAM_NAME,
            },
            "cache": {"entries": len(self.cache)},
        }

    def _coordinates(
        self, latitude: str | None, longitude: str | None
    ) -> tuple[str, str]:
        lat = latitude or format_coordinate(self.default_location.latitude)
        lon = longitude or format_coordinate(self.default_location.longitude)
        return lat, lon

    def _call(self, fn, *args) -> dict:
        try:
            raw = fn(*args)
        except httpx.HTTPError as e:
            logger.error("%s error: %s", UPSTREAM_NAME, e)
            raise UpstreamError(str(e)) from e
        except ValueError as e:
            logger.error("%s returned invalid JSON: %s", UPSTREAM_NAME, e)
            raise UpstreamError(f"Invalid JSON from upstream: {e}") from e
        if not isinstance(raw, dict):
            raise UpstreamError("Unexpected upstream payload: expected a JSON object")
        return raw


def require_date_range(
    start_date: str | None, end_date: str | None
) -> tuple[str, str]:
    missing = [
        name
        for name, value in (("start_date", start_date), ("end_date", end_date))
        if not value
    ]
    if missing:
        raise MissingParametersError(missing)
    return start_date, end_date
