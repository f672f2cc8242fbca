"""Open-Meteo forecast/archive API client with optional retry on rate limits."""

import logging
import time

import httpx

from weathertwin.config.defaults import ARCHIVE_URL, FORECAST_URL

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weathertwin-proxy/0.1.0"

REALTIME_CURRENT_FIELDS = "temperature_2m,relative_humidity_2m"
REALTIME_HOURLY_FIELDS = "temperature_2m"
HISTORICAL_HOURLY_FIELDS = "temperature_2m,relative_humidity_2m"

# Rate limited or temporarily unavailable
RETRY_STATUSES = (429, 503)


class OpenMeteoClient:
    def __init__(
        self,
        forecast_url: str = FORECAST_URL,
        archive_url: str = ARCHIVE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_base_delay: float = 1.0,
    ):
        self.forecast_url = forecast_url
        self.archive_url = archive_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def get_current(self, latitude: str, longitude: str) -> dict:
        """Fetch current temperature and humidity from the forecast endpoint."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": REALTIME_CURRENT_FIELDS,
            "hourly": REALTIME_HOURLY_FIELDS,
        }
        return self._get(self.forecast_url, params)

    def get_archive(
        self, latitude: str, longitude: str, start_date: str, end_date: str
    ) -> dict:
        """Fetch hourly temperature and humidity for a date range."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date,
            "end_date": end_date,
            "hourly": HISTORICAL_HOURLY_FIELDS,
        }
        return self._get(self.archive_url, params)

    def _get(self, url: str, params: dict) -> dict:
        """GET, retrying rate limits and outages when retries are enabled."""
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        for attempt in range(self.max_retries + 1):
            retries_left = attempt < self.max_retries
            try:
                resp = httpx.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
            except httpx.RequestError as e:
                if not retries_left:
                    raise
                self._wait(attempt, f"request error: {e}")
                continue

            if resp.status_code in RETRY_STATUSES and retries_left:
                self._wait(attempt, f"HTTP {resp.status_code}")
                continue
            if resp.is_error:
                logger.warning(
                    "Open-Meteo rejected %s (%d): %s",
                    url, resp.status_code, error_reason(resp),
                )
            resp.raise_for_status()
            return resp.json()

    def _wait(self, attempt: int, cause: str) -> None:
        delay = self.retry_base_delay * (2**attempt)
        logger.warning(
            "Open-Meteo %s, retrying in %.1fs (attempt %d/%d)",
            cause, delay, attempt + 1, self.max_retries,
        )
        time.sleep(delay)


def error_reason(resp: httpx.Response) -> str:
    """Extract ``reason`` from Open-Meteo's ``{"error": true, "reason": ...}`` body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or resp.reason_phrase
    if isinstance(body, dict) and body.get("reason"):
        return str(body["reason"])
    return resp.text[:200]
