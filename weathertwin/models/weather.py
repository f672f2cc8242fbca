"""Weather reading and historical series models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WeatherReading:
    timestamp: str
    temperature: float | None
    humidity: float | None
    units: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "WeatherReading":
        """Build from the proxy's /api/realtime body."""
        return cls(
            timestamp=payload.get("timestamp", ""),
            temperature=payload.get("temperature"),
            humidity=payload.get("humidity"),
            units=dict(payload.get("units") or {}),
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "units": dict(self.units),
        }


@dataclass(frozen=True)
class HistoryRow:
    time: str
    temperature: float | None
    humidity: float | None


@dataclass(frozen=True)
class HistoricalSeries:
    """Hourly readings as parallel arrays, as returned by the archive API."""

    time: list[str]
    temperature_2m: list[float | None]
    relative_humidity_2m: list[float | None]
    units: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "HistoricalSeries":
        """Build from the proxy's /api/historical body ({data, units})."""
        data = payload.get("data") or {}
        return cls(
            time=list(data.get("time", [])),
            temperature_2m=list(data.get("temperature_2m", [])),
            relative_humidity_2m=list(data.get("relative_humidity_2m", [])),
            units=dict(payload.get("units") or {}),
        )

    def __len__(self) -> int:
        return len(self.temperature_2m)

    def rows(self, start: int = 0, stop: int | None = None) -> list[HistoryRow]:
        """Zip the parallel arrays into rows for the [start, stop) window."""
        if stop is None:
            stop = len(self)
        result = []
        for i in range(max(start, 0), min(stop, len(self))):
            result.append(
                HistoryRow(
                    time=self.time[i] if i < len(self.time) else "",
                    temperature=self.temperature_2m[i],
                    humidity=(
                        self.relative_humidity_2m[i]
                        if i < len(self.relative_humidity_2m)
                        else None
                    ),
                )
            )
        return result
