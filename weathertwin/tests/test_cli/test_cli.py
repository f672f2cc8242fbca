"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import pytest
import respx
import yaml

from weathertwin.cli import main

API_URL = "http://proxy.test/api"

REALTIME_BODY = {
    "timestamp": "2026-10-16T12:00:00.000Z",
    "temperature": 20.0,
    "humidity": 50,
    "units": {"temperature_2m": "°C", "relative_humidity_2m": "%"},
}


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "test.yaml"
    with open(path, "w") as f:
        yaml.dump({"dashboard": {"api_url": API_URL}}, f)
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert '"realtime_ttl_seconds": 60.0' in captured.out

    def test_config_set_persists(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main([
            "--config", str(config_path),
            "config", "set", "cache.realtime_ttl_seconds=30",
        ])
        assert result == 0
        captured = capsys.readouterr()
        assert "30.0" in captured.out
        saved = yaml.safe_load(config_path.read_text())
        assert saved["cache"]["realtime_ttl_seconds"] == 30.0

    def test_config_set_bad_format(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "set", "nope"])
        assert result == 1

    def test_config_set_invalid_value(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main([
            "--config", str(config_path),
            "config", "set", "dashboard.page_size=0",
        ])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    @respx.mock
    def test_realtime(self, config_path: Path, capsys):
        respx.get(f"{API_URL}/realtime").mock(
            return_value=httpx.Response(200, json=REALTIME_BODY)
        )
        result = main(["--config", str(config_path), "realtime"])
        assert result == 0
        assert "Temperature: 20 °C" in capsys.readouterr().out

    @respx.mock
    def test_realtime_proxy_down(self, config_path: Path, capsys):
        respx.get(f"{API_URL}/realtime").mock(side_effect=httpx.ConnectError("down"))
        result = main(["--config", str(config_path), "realtime"])
        assert result == 1
        assert "No real-time data" in capsys.readouterr().out

    @respx.mock
    def test_historical_page(self, config_path: Path, archive_payload: dict, capsys):
        route = respx.get(f"{API_URL}/historical").mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": archive_payload["hourly"],
                    "units": archive_payload["hourly_units"],
                },
            )
        )
        result = main([
            "--config", str(config_path), "historical",
            "--start", "2026-10-01", "--end", "2026-10-01", "--page", "3",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "Page 3 of 3" in out
        assert "2026-10-01T23:00" in out
        assert route.calls[0].request.url.params["start_date"] == "2026-10-01"

    @respx.mock
    def test_scene_json(self, config_path: Path, capsys):
        respx.get(f"{API_URL}/realtime").mock(
            return_value=httpx.Response(200, json=REALTIME_BODY)
        )
        result = main(["--config", str(config_path), "scene", "--json"])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["temperature"] == 20.0
        assert data["cloud_count"] == 6
        assert data["hud"][0] == "Weather (Almería, Spain)"

    @respx.mock
    def test_watch_single_poll(self, config_path: Path, capsys):
        respx.get(f"{API_URL}/realtime").mock(
            return_value=httpx.Response(200, json=REALTIME_BODY)
        )
        result = main(["--config", str(config_path), "watch", "--count", "1"])
        assert result == 0
        assert "Clouds: 6 clusters" in capsys.readouterr().out

    @respx.mock
    def test_realtime_html_body(self, config_path: Path, capsys):
        respx.get(f"{API_URL}/realtime").mock(
            return_value=httpx.Response(200, text="<html>gateway</html>")
        )
        result = main(["--config", str(config_path), "realtime"])
        assert result == 1
        assert "No real-time data" in capsys.readouterr().out

    @respx.mock
    def test_scene_non_object_body(self, config_path: Path, capsys):
        respx.get(f"{API_URL}/realtime").mock(
            return_value=httpx.Response(200, json=[1])
        )
        result = main(["--config", str(config_path), "scene"])
        assert result == 1
        assert "Error:" in capsys.readouterr().out
