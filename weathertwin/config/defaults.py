"""Default upstream endpoints and locations."""

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

# Used by the proxy when a request carries no coordinates (Berlin).
DEFAULT_LATITUDE = 52.52
DEFAULT_LONGITUDE = 13.41
DEFAULT_LOCATION_NAME = "Berlin, Germany"

# Location the dashboard asks the proxy about.
DASHBOARD_LATITUDE = 36.8340
DASHBOARD_LONGITUDE = -2.4637
DASHBOARD_LOCATION_NAME = "Almería, Spain"
