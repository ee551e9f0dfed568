"""Conversion settings: defaults, config files and command-line precedence."""

import argparse
import json
import tomllib
from pathlib import Path
from typing import Any, Optional

from .models import ConversionOptions

DEFAULTS: dict[str, Any] = {
    "region": "ROA",
    "timezone_order": ["WAT", "CAT"],
    "text_color": "#FFFFFF",
    "bg_color": "#1A1A1A",
    "merge_slots": True,
    "day_start_hour": None,
    "year": None,
}


def parse_timezone_order(value: Any) -> list[str]:
    """Accept "WAT, CAT" or ["WAT", "CAT"]; labels are upper-cased."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(v) for v in value]
    return [item.strip().upper() for item in items if item.strip()]


def _normalize_config_keys(cfg: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in cfg.items():
        key = k.replace("-", "_")
        if key == "background_color":
            key = "bg_color"
        out[key] = v
    return out


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load settings from a .toml or .json file.

    A TOML file may keep its settings under a [conversion] table.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the content is not a table
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            data = data.get("conversion", data)
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            raise ValueError(f"Unsupported config format: {suffix}. Use .toml or .json")
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a table of settings")

    unknown = sorted(set(_normalize_config_keys(data)) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    return _normalize_config_keys(data)


def _check_hour(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    hour = int(value)
    if not 0 <= hour <= 23:
        raise ValueError(f"day_start_hour must be between 0 and 23, got {hour}")
    return hour


def build_options(args: Optional[argparse.Namespace] = None, config_path: Optional[Path] = None) -> ConversionOptions:
    """
    Merge defaults, an optional config file and command-line values.

    Command-line values that are None (not given) fall back to the config
    file, then to DEFAULTS.
    """
    merged: dict[str, Any] = dict(DEFAULTS)

    config_path = config_path or (getattr(args, "config", None) if args else None)
    if config_path:
        merged.update(load_config_file(Path(config_path)))

    if args is not None:
        for key in DEFAULTS:
            value = getattr(args, key, None)
            if value is not None:
                merged[key] = value

    return ConversionOptions(
        region=str(merged["region"]),
        timezone_order=parse_timezone_order(merged["timezone_order"]),
        text_color=str(merged["text_color"]),
        bg_color=str(merged["bg_color"]),
        merge_slots=bool(merged["merge_slots"]),
        day_start_hour=_check_hour(merged["day_start_hour"]),
        year=int(merged["year"]) if merged["year"] is not None else None,
    )
