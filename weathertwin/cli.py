"""CLI entry point for the weather proxy and dashboard client."""

import argparse
import logging

import httpx

from weathertwin.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from weathertwin.config.schema import ProxyConfig
from weathertwin.dashboard.api_client import TemperatureApiClient
from weathertwin.dashboard.formatters import format_scene_json, format_scene_text
from weathertwin.dashboard.historical_view import HistoricalView
from weathertwin.dashboard.poller import DashboardPoller
from weathertwin.dashboard.realtime_view import RealtimeView
from weathertwin.dashboard.scene import WeatherScene

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weathertwin",
        description="Open-Meteo proxy with TTL cache, plus a dashboard client",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the proxy server")
    serve_p.add_argument("--host", help="Override server.host")
    serve_p.add_argument("--port", type=int, help="Override server.port")

    # dashboard views
    sub.add_parser("realtime", help="Show the current reading")
    hist_p = sub.add_parser("historical", help="Show a page of historical data")
    hist_p.add_argument("--start", help="Start date YYYY-MM-DD")
    hist_p.add_argument("--end", help="End date YYYY-MM-DD")
    hist_p.add_argument("--page", type=int, default=1, help="Page number")
    scene_p = sub.add_parser(
        "scene", help="Show scene parameters for the current reading"
    )
    scene_p.add_argument("--json", action="store_true", help="JSON output")
    watch_p = sub.add_parser("watch", help="Poll the current reading continuously")
    watch_p.add_argument("--interval", type=float, help="Seconds between polls")
    watch_p.add_argument("--count", type=int, help="Stop after this many polls")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "realtime":
        return _cmd_realtime(config, args)
    elif args.command == "historical":
        return _cmd_historical(config, args)
    elif args.command == "scene":
        return _cmd_scene(config, args)
    elif args.command == "watch":
        return _cmd_watch(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _api_client(config: ProxyConfig) -> TemperatureApiClient:
    return TemperatureApiClient(
        base_url=config.dashboard.api_url,
        location=config.dashboard.location,
        timeout=config.dashboard.timeout_seconds,
    )


def _cmd_serve(config, args) -> int:
    from weathertwin.server import serve

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if overrides:
        config = config.model_copy(
            update={"server": config.server.model_copy(update=overrides)}
        )
    serve(config)
    return 0


def _cmd_realtime(config, args) -> int:
    view = RealtimeView(_api_client(config))
    view.load()
    print(view.render())
    return 0 if view.error is None else 1


def _cmd_historical(config, args) -> int:
    view = HistoricalView(
        _api_client(config),
        page_size=config.dashboard.page_size,
        history_days=config.dashboard.history_days,
    )
    if args.start or args.end:
        view.start_date = args.start or args.end
        view.end_date = args.end or args.start
        if view.start_date > view.end_date:
            view.end_date = view.start_date
        view.fetch()
    else:
        view.init()

    if view.error is not None:
        print(f"Error: {view.error}")
        return 1
    view.change_page(args.page)
    print(view.render())
    return 0


def _cmd_scene(config, args) -> int:
    api = _api_client(config)
    location = api.default_location()
    scene = WeatherScene(location_name=location.name)
    try:
        reading = api.get_realtime(location.latitude, location.longitude)
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        return 1
    scene.apply_weather(reading.temperature, reading.humidity)
    print(format_scene_json(scene) if args.json else format_scene_text(scene))
    return 0


def _cmd_watch(config, args) -> int:
    api = _api_client(config)
    scene = WeatherScene(location_name=api.default_location().name)
    interval = args.interval or config.dashboard.poll_interval_seconds
    poller = DashboardPoller(api, scene=scene, interval=interval)
    poller.add_listener(lambda _reading: print(format_scene_text(scene) + "\n"))
    try:
        poller.run(max_polls=args.count)
    except KeyboardInterrupt:
        poller.stop()
    all_failed = poller.total_polls > 0 and poller.total_failures == poller.total_polls
    return 1 if all_failed else 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except Exception as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key.strip()} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
