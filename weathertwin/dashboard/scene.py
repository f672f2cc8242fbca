"""Weather-driven scene state for the digital-twin view.

The renderer itself lives in the browser; this module owns every number it
draws from. ``apply_weather`` maps a reading to colors, light, fog and cloud
cover by linear interpolation, and ``tick`` advances the cosmetic animation
(sun pulse, cloud drift) independently of data updates.
"""

import math
import random
from dataclasses import dataclass, field

MIN_TEMP_C = -5.0
MAX_TEMP_C = 45.0

DEFAULT_TEMPERATURE = 20.0
DEFAULT_HUMIDITY = 50.0

MIN_FOG_DENSITY = 0.005
MAX_FOG_DENSITY = 0.035

CLOUD_WRAP_X = 12.0
INITIAL_CLOUD_COUNT = 5


@dataclass(frozen=True)
class Color:
    """RGB color with channels in [0, 1]."""

    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: int) -> "Color":
        return cls(
            ((value >> 16) & 0xFF) / 255,
            ((value >> 8) & 0xFF) / 255,
            (value & 0xFF) / 255,
        )

    def to_hex(self) -> int:
        r, g, b = (round(_clamp(c, 0.0, 1.0) * 255) for c in (self.r, self.g, self.b))
        return (r << 16) | (g << 8) | b

    def hex_string(self) -> str:
        return f"#{self.to_hex():06x}"

    def lerp(self, other: "Color", alpha: float) -> "Color":
        return Color(
            self.r + (other.r - self.r) * alpha,
            self.g + (other.g - self.g) * alpha,
            self.b + (other.b - self.b) * alpha,
        )

    def scaled(self, factor: float) -> "Color":
        return Color(self.r * factor, self.g * factor, self.b * factor)


SUN_COLD = Color.from_hex(0xFFF1C7)
SUN_HOT = Color.from_hex(0xFF9A1C)
SKY_COLD = Color.from_hex(0x90B8E8)
SKY_HOT = Color.from_hex(0xFFD9A8)
INITIAL_FOG_COLOR = Color.from_hex(0x9DBBE0)


@dataclass
class CloudCluster:
    x: float
    z: float
    speed: float
    pieces: int


@dataclass
class SceneState:
    sun_color: Color = SUN_COLD
    sun_base_color: Color = SUN_COLD.scaled(0.2)
    sun_light_intensity: float = 1.2
    sun_emissive_intensity: float = 1.5
    cloud_opacity: float = 0.85
    fog_density: float = 0.02
    sky_color: Color = INITIAL_FOG_COLOR
    clouds: list[CloudCluster] = field(default_factory=list)

    @property
    def cloud_count(self) -> int:
        return len(self.clouds)

    def to_dict(self) -> dict:
        return {
            "sun_color": self.sun_color.hex_string(),
            "sun_base_color": self.sun_base_color.hex_string(),
            "sun_light_intensity": round(self.sun_light_intensity, 4),
            "sun_emissive_intensity": round(self.sun_emissive_intensity, 4),
            "cloud_opacity": round(self.cloud_opacity, 4),
            "cloud_count": self.cloud_count,
            "fog_density": round(self.fog_density, 5),
            "sky_color": self.sky_color.hex_string(),
        }


def normalize_temperature(temperature: float) -> float:
    return _clamp((temperature - MIN_TEMP_C) / (MAX_TEMP_C - MIN_TEMP_C), 0.0, 1.0)


def normalize_humidity(humidity: float) -> float:
    return _clamp(humidity / 100, 0.0, 1.0)


def desired_cloud_count(humidity_norm: float) -> int:
    return math.floor(3 + humidity_norm * 7)


class WeatherScene:
    def __init__(self, location_name: str = "", rng: random.Random | None = None):
        self.location_name = location_name
        self.rng = rng or random.Random()
        self.state = SceneState()
        self.temperature = 0.0
        self.humidity = 0.0
        # Data-driven light level; tick() pulses around it.
        self._base_light_intensity = 1.2
        self._create_clouds(INITIAL_CLOUD_COUNT)

    def apply_weather(
        self, temperature: float | None, humidity: float | None
    ) -> SceneState:
        temp = DEFAULT_TEMPERATURE if temperature is None else temperature
        hum = DEFAULT_HUMIDITY if humidity is None else humidity
        self.temperature = temp
        self.humidity = hum

        t = normalize_temperature(temp)
        h = normalize_humidity(hum)

        s = self.state
        s.sun_color = SUN_COLD.lerp(SUN_HOT, t)
        s.sun_base_color = s.sun_color.scaled(0.2)
        self._base_light_intensity = 0.6 + t * 1.8
        s.sun_light_intensity = self._base_light_intensity

        s.cloud_opacity = 0.35 + h * 0.6
        count = desired_cloud_count(h)
        if s.cloud_count != count:
            self._create_clouds(count)

        s.fog_density = MIN_FOG_DENSITY + h * (MAX_FOG_DENSITY - MIN_FOG_DENSITY)
        s.sky_color = SKY_COLD.lerp(SKY_HOT, t)
        return s

    def tick(self, delta: float, elapsed: float) -> None:
        pulse = 1 + math.sin(elapsed * 1.6) * 0.06
        self.state.sun_emissive_intensity = 1.4 * pulse
        self.state.sun_light_intensity = self._base_light_intensity * pulse

        for cluster in self.state.clouds:
            cluster.x += cluster.speed * delta * 10
            if cluster.x > CLOUD_WRAP_X:
                cluster.x = -CLOUD_WRAP_X
            if cluster.x < -CLOUD_WRAP_X:
                cluster.x = CLOUD_WRAP_X

    def hud_lines(self) -> list[str]:
        title = f"Weather ({self.location_name})" if self.location_name else "Weather"
        return [
            title,
            f"Temperature: {self.temperature:.1f} °C",
            f"Humidity: {self.humidity:.0f} %",
        ]

    def _create_clouds(self, count: int) -> None:
        rng = self.rng
        self.state.clouds = [
            CloudCluster(
                x=(rng.random() - 0.5) * 18,
                z=(rng.random() - 0.5) * 10,
                speed=0.02 + rng.random() * 0.04,
                pieces=4 + math.floor(rng.random() * 4),
            )
            for _ in range(count)
        ]


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)
