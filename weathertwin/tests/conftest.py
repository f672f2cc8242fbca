"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weathertwin.cache.response_cache import ResponseCache
from weathertwin.config.schema import ProxyConfig, UpstreamConfig
from weathertwin.ingest.openmeteo_client import OpenMeteoClient
from weathertwin.service.weather_service import WeatherService

FIXTURE_DIR = Path(__file__).parent / "fixtures"

TEST_FORECAST_URL = "https://test-forecast.example.com/v1/forecast"
TEST_ARCHIVE_URL = "https://test-archive.example.com/v1/archive"
TEST_API_URL = "http://proxy.test/api"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def forecast_payload() -> dict:
    with open(FIXTURE_DIR / "openmeteo_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def archive_payload() -> dict:
    with open(FIXTURE_DIR / "openmeteo_archive.json") as f:
        return json.load(f)


@pytest.fixture
def default_config() -> ProxyConfig:
    """Default config pointed at fake upstream URLs."""
    return ProxyConfig(
        upstream=UpstreamConfig(
            forecast_url=TEST_FORECAST_URL, archive_url=TEST_ARCHIVE_URL
        )
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "server": {"port": 3001},
        "cache": {"realtime_ttl_seconds": 30},
        "dashboard": {"page_size": 5},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(clock=clock)


@pytest.fixture
def openmeteo() -> OpenMeteoClient:
    return OpenMeteoClient(
        forecast_url=TEST_FORECAST_URL,
        archive_url=TEST_ARCHIVE_URL,
        retry_base_delay=0.01,
    )


@pytest.fixture
def service(
    openmeteo: OpenMeteoClient, cache: ResponseCache, default_config: ProxyConfig
) -> WeatherService:
    return WeatherService(
        openmeteo,
        cache,
        default_location=default_config.default_location,
        cache_config=default_config.cache,
    )
