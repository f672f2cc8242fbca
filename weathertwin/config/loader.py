"""YAML config loader with runtime get/set."""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from weathertwin.config.schema import ProxyConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None = None) -> ProxyConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the built-in defaults.
    """
    if path is None:
        return ProxyConfig()

    path = Path(path)
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return ProxyConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return ProxyConfig(**raw)


def config_hash(config: ProxyConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: ProxyConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.realtime_ttl_seconds'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: ProxyConfig, dotted_key: str, value: Any) -> ProxyConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new ProxyConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return ProxyConfig(**data)


def save_config(config: ProxyConfig, path: str | Path) -> None:
    """Write config back to YAML, keeping a .bak copy of the previous file."""
    path = Path(path)
    if path.exists():
        backup = path.with_suffix(path.suffix + ".bak")
        backup.write_text(path.read_text())
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(
            json.loads(config.model_dump_json()),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
