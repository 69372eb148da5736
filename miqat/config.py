import copy
import json
import logging
import os

from .adjustments import create_adjustments
from .errors import ConfigError
from .methods import create_custom_method, get_method, parse_method_name
from .models import (
    PRAYER_KEYS,
    AsrMethod,
    CalculationParams,
    Coordinates,
    HighLatitudeMethod,
    MethodName,
)

log = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "miqat")
CONFIG_PATH = os.environ.get("MIQAT_CONFIG") or os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "location": "Makkah",
    "locations": {
        "Makkah": {"lat": 21.4225, "lng": 39.8262, "elevation": 0, "label": "Makkah", "tz": "Asia/Riyadh"}
    },
    "default_tz": None,
    "method": "MWL",
    "asr_method": "Standard",
    "high_latitude_method": "NightMiddle",
    "adjustments": {
        "fajr": 0,
        "sunrise": 0,
        "dhuhr": 0,
        "asr": 0,
        "maghrib": 0,
        "isha": 0
    },
    "custom_method": {
        "fajr_angle": 18,
        "isha_angle": 17
    },
    "time_format": "24h",
    "display": {
        "format": "{next_name} {next_time} - {countdown}"
    }
}


def load_config(path=CONFIG_PATH):
    if not os.path.exists(path):
        config = copy.deepcopy(DEFAULT_CONFIG)
        save_config(config, path)
        return config
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    config = copy.deepcopy(DEFAULT_CONFIG)
    config.update(data)
    return config


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    log.info("Wrote config to %s", path)


def parse_choice(enum_cls, value, what):
    for member in enum_cls:
        if str(value).lower() in (member.value.lower(), member.name.lower()):
            return member
    raise ConfigError(f"Unknown {what}: {value}")


def build_method(config):
    try:
        name = parse_method_name(config.get("method", "MWL"))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    if name is not MethodName.CUSTOM:
        return get_method(name)
    custom = dict(config.get("custom_method") or {})
    try:
        return create_custom_method(
            float(custom.pop("fajr_angle", 18)),
            float(custom.pop("isha_angle", 17)),
            custom,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid custom_method: {exc}") from exc


def build_params(config):
    adjustments = config.get("adjustments") or {}
    try:
        adjustments = create_adjustments({k: float(v) for k, v in adjustments.items()})
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid adjustments: {exc}") from exc
    return CalculationParams(
        method=build_method(config),
        asr_method=parse_choice(AsrMethod, config.get("asr_method", "Standard"), "asr method"),
        high_latitude_method=parse_choice(
            HighLatitudeMethod,
            config.get("high_latitude_method", "NightMiddle"),
            "high latitude method",
        ),
        adjustments=adjustments,
    )


def resolve_location(config, location_key=None):
    location_key = location_key or config.get("location")
    loc = config.get("locations", {}).get(location_key)
    if not loc or loc.get("lat") is None or loc.get("lng") is None:
        raise ConfigError(f"Location not configured: {location_key}")
    coords = Coordinates(
        latitude=float(loc["lat"]),
        longitude=float(loc["lng"]),
        elevation=float(loc.get("elevation") or 0.0),
    )
    tz_name = loc.get("tz") or config.get("default_tz")
    return loc.get("label") or location_key, coords, tz_name


def set_offset(config, prayer, minutes):
    prayer_key = prayer.lower()
    if prayer_key not in PRAYER_KEYS:
        raise ConfigError(f"Unknown prayer for offset: {prayer}")
    config.setdefault("adjustments", {})[prayer_key] = int(minutes)
    return config
