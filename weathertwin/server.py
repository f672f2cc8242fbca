"""Weather proxy server: FastAPI app forwarding to Open-Meteo with a TTL cache."""

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weathertwin.cache.response_cache import ResponseCache
from weathertwin.config.schema import ProxyConfig
from weathertwin.ingest.openmeteo_client import OpenMeteoClient
from weathertwin.service.weather_service import (
    MissingParametersError,
    UpstreamError,
    WeatherService,
)

logger = logging.getLogger(__name__)

MISSING_DATES_ERROR = "Missing required parameters: start_date, end_date"

router = APIRouter(prefix="/api")


def build_service(config: ProxyConfig) -> WeatherService:
    upstream = config.upstream
    client = OpenMeteoClient(
        forecast_url=upstream.forecast_url,
        archive_url=upstream.archive_url,
        timeout=upstream.timeout_seconds,
        max_retries=upstream.max_retries,
        retry_base_delay=upstream.retry_base_delay_seconds,
    )
    return WeatherService(
        client,
        ResponseCache(),
        default_location=config.default_location,
        cache_config=config.cache,
    )


def create_app(
    config: ProxyConfig | None = None, service: WeatherService | None = None
) -> FastAPI:
    config = config or ProxyConfig()
    app = FastAPI(title="Weather Proxy", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = config
    app.state.service = service or build_service(config)
    app.include_router(router)
    app.add_exception_handler(Exception, _unhandled_error)
    return app


def get_service(request: Request) -> WeatherService:
    return request.app.state.service


def _error(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error, "details": details}
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return _error(500, "Internal server error", str(exc))


# ── Data endpoints ──────────────────────────────────────────────


@router.get("/realtime")
def get_realtime(
    latitude: str | None = None,
    longitude: str | None = None,
    service: WeatherService = Depends(get_service),
):
    """Current temperature and humidity (cached for one minute)."""
    try:
        return service.realtime(latitude, longitude)
    except UpstreamError as e:
        logger.error("Real-time fetch failed: %s", e)
        return _error(500, "Failed to fetch real-time data", str(e))


@router.get("/historical")
def get_historical(
    latitude: str | None = None,
    longitude: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    service: WeatherService = Depends(get_service),
):
    """Hourly series for a date range (cached for one hour)."""
    try:
        return service.historical(latitude, longitude, start_date, end_date)
    except MissingParametersError as e:
        return _error(400, MISSING_DATES_ERROR, str(e))
    except UpstreamError as e:
        logger.error("Historical fetch failed: %s", e)
        return _error(500, "Failed to fetch historical data", str(e))


@router.get("/combined")
def get_combined(
    latitude: str | None = None,
    longitude: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    service: WeatherService = Depends(get_service),
):
    """Real-time and historical data in one response."""
    try:
        return service.combined(latitude, longitude, start_date, end_date)
    except MissingParametersError as e:
        return _error(400, MISSING_DATES_ERROR, str(e))
    except UpstreamError as e:
        logger.error("Combined fetch failed: %s", e)
        return _error(500, "Failed to fetch combined data", str(e))


@router.get("/health")
def get_health(service: WeatherService = Depends(get_service)):
    """Quick health check."""
    return service.health()


def serve(config: ProxyConfig) -> None:
    import uvicorn

    app = create_app(config)
    logger.info(
        "Proxy listening on http://%s:%d, endpoints: /api/realtime, "
        "/api/historical, /api/combined, /api/health",
        config.server.host, config.server.port,
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port)


app = create_app()


if __name__ == "__main__":
    serve(ProxyConfig())
