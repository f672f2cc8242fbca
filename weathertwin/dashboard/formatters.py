"""Output formatters for dashboard views."""

import json

from weathertwin.dashboard.scene import WeatherScene


def format_value(value: float | None) -> str:
    return "n/a" if value is None else f"{value:g}"


def format_scene_text(scene: WeatherScene) -> str:
    """HUD text followed by the current visual parameters."""
    s = scene.state
    lines = list(scene.hud_lines())
    lines.extend([
        f"Sun color: {s.sun_color.hex_string()} "
        f"(base {s.sun_base_color.hex_string()})",
        f"Sun light: {s.sun_light_intensity:.2f}",
        f"Sky/fog color: {s.sky_color.hex_string()} | "
        f"fog density {s.fog_density:.4f}",
        f"Clouds: {s.cloud_count} clusters @ opacity {s.cloud_opacity:.2f}",
    ])
    return "\n".join(lines)


def format_scene_json(scene: WeatherScene) -> str:
    data = {
        "hud": scene.hud_lines(),
        "temperature": scene.temperature,
        "humidity": scene.humidity,
        **scene.state.to_dict(),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
