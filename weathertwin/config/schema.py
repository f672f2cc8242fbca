"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weathertwin.config.defaults import (
    ARCHIVE_URL,
    DASHBOARD_LATITUDE,
    DASHBOARD_LOCATION_NAME,
    DASHBOARD_LONGITUDE,
    DEFAULT_LATITUDE,
    DEFAULT_LOCATION_NAME,
    DEFAULT_LONGITUDE,
    FORECAST_URL,
)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    name: str = ""


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]


class UpstreamConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_url: str = FORECAST_URL
    archive_url: str = ARCHIVE_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=0, ge=0)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    realtime_ttl_seconds: float = Field(default=60.0, gt=0.0)
    historical_ttl_seconds: float = Field(default=3600.0, gt=0.0)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_url: str = "http://localhost:3000/api"
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    poll_interval_seconds: float = Field(default=2.0, gt=0.0)
    page_size: int = Field(default=10, ge=1)
    history_days: int = Field(default=7, ge=0)
    location: LocationConfig = LocationConfig(
        latitude=DASHBOARD_LATITUDE,
        longitude=DASHBOARD_LONGITUDE,
        name=DASHBOARD_LOCATION_NAME,
    )


class ProxyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    server: ServerConfig = ServerConfig()
    upstream: UpstreamConfig = UpstreamConfig()
    cache: CacheConfig = CacheConfig()
    default_location: LocationConfig = LocationConfig(
        latitude=DEFAULT_LATITUDE,
        longitude=DEFAULT_LONGITUDE,
        name=DEFAULT_LOCATION_NAME,
    )
    dashboard: DashboardConfig = DashboardConfig()
