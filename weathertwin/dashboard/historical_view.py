"""Historical view: date-range selection and client-side pagination."""

import logging
import math
from datetime import date, timedelta

import httpx

from weathertwin.dashboard.api_client import TemperatureApiClient
from weathertwin.dashboard.formatters import format_value
from weathertwin.models.weather import HistoricalSeries, HistoryRow

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_HISTORY_DAYS = 7


class HistoricalView:
    """Keeps the selected date range and the page being shown.

    Dates are ISO ``YYYY-MM-DD`` strings, so plain string comparison orders
    them correctly.
    """

    def __init__(
        self,
        api: TemperatureApiClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        history_days: int = DEFAULT_HISTORY_DAYS,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.api = api
        self.page_size = page_size
        self.history_days = history_days

        self.series: HistoricalSeries | None = None
        self.loading = False
        self.error: str | None = None

        self.start_date = ""
        self.end_date = ""
        self.max_date = ""
        self.current_page = 1

    def init(self, today: date | None = None) -> None:
        """Select the last ``history_days`` days ending today and fetch them."""
        today = today or date.today()
        self.max_date = today.isoformat()
        self.end_date = self.max_date
        self.start_date = (today - timedelta(days=self.history_days)).isoformat()
        self.fetch()

    def on_start_date_change(self, start_date: str | None = None) -> None:
        if start_date is not None:
            self.start_date = start_date
        if self.start_date > self.end_date:
            self.end_date = self.start_date
        self.fetch()

    def on_end_date_change(self, end_date: str | None = None) -> None:
        if end_date is not None:
            self.end_date = end_date
        if self.end_date < self.start_date:
            self.start_date = self.end_date
        self.fetch()

    def fetch(self) -> None:
        if not self.start_date or not self.end_date:
            return

        self.loading = True
        location = self.api.default_location()
        try:
            self.series = self.api.get_historical(
                location.latitude, location.longitude,
                self.start_date, self.end_date,
            )
            self.current_page = 1
            self.error = None
        except httpx.HTTPError as e:
            logger.error("Error fetching historical data: %s", e)
            self.error = str(e)
        finally:
            self.loading = False

    @property
    def total_pages(self) -> int:
        if self.series is None:
            return 0
        return math.ceil(len(self.series) / self.page_size)

    def change_page(self, page: int) -> None:
        if 1 <= page <= self.total_pages:
            self.current_page = page

    def page_rows(self) -> list[HistoryRow]:
        if self.series is None:
            return []
        start = (self.current_page - 1) * self.page_size
        return self.series.rows(start, start + self.page_size)

    def render(self) -> str:
        """Plain-text table of the current page."""
        if self.loading:
            return "Loading historical data..."
        if self.series is None:
            return "No historical data available"

        temp_unit = self.series.units.get("temperature_2m", "°C")
        hum_unit = self.series.units.get("relative_humidity_2m", "%")
        lines = [
            f"Historical data {self.start_date} .. {self.end_date}",
            f"{'Time':<18} {'Temp (' + temp_unit + ')':>10} "
            f"{'Humidity (' + hum_unit + ')':>14}",
        ]
        for row in self.page_rows():
            lines.append(
                f"{row.time:<18} {format_value(row.temperature):>10} "
                f"{format_value(row.humidity):>14}"
            )
        lines.append(f"Page {self.current_page} of {self.total_pages}")
        return "\n".join(lines)
