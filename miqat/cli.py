import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import date, datetime, timedelta

from .calc import calculate_prayer_times
from .config import (
    CONFIG_PATH,
    build_params,
    load_config,
    parse_choice,
    resolve_location,
    save_config,
    set_offset,
)
from .errors import ConfigError
from .methods import get_available_methods, get_method, get_method_description, parse_method_name
from .models import AsrMethod, Coordinates, HighLatitudeMethod
from .render import (
    build_payload,
    build_sunnah_lines,
    build_table,
    get_timezone,
    localize_times,
    render_status,
)


def _parse_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value}")


def _resolve_params(config, args):
    params = build_params(config)
    if args.method:
        try:
            params = replace(params, method=get_method(args.method))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    if args.asr:
        params = replace(params, asr_method=parse_choice(AsrMethod, args.asr, "asr method"))
    if args.high_lat:
        params = replace(
            params,
            high_latitude_method=parse_choice(HighLatitudeMethod, args.high_lat, "high latitude method"),
        )
    return params


def _resolve_location(config, args):
    if args.lat is not None and args.lng is not None:
        coords = Coordinates(
            latitude=float(args.lat),
            longitude=float(args.lng),
            elevation=float(args.elevation or 0.0),
        )
        return f"{coords.latitude}, {coords.longitude}", coords, args.tz or config.get("default_tz")
    label, coords, tz_name = resolve_location(config)
    return label, coords, args.tz or tz_name


def show_times(config, args):
    params = _resolve_params(config, args)
    label, coords, tz_name = _resolve_location(config, args)
    tzinfo = get_timezone(tz_name)
    format_24h = not args.twelve_hour and config.get("time_format", "24h") == "24h"
    start = args.date or datetime.now(tzinfo).date()

    if args.status:
        now = datetime.now(tzinfo)
        today = localize_times(calculate_prayer_times(now.date(), coords, params), tzinfo)
        tomorrow = localize_times(
            calculate_prayer_times(now.date() + timedelta(days=1), coords, params), tzinfo
        )
        display_format = config.get("display", {}).get("format")
        print(render_status(now, today, tomorrow, format_24h, display_format))
        return 0

    payloads = []
    for offset in range(max(1, args.days)):
        day = start + timedelta(days=offset)
        times = localize_times(calculate_prayer_times(day, coords, params), tzinfo)
        if args.json:
            payloads.append(build_payload(times, day, params.method, label))
            continue
        print(build_table(times, day, params.method, params.asr_method, label, format_24h))
        if args.sunnah:
            tomorrow = localize_times(
                calculate_prayer_times(day + timedelta(days=1), coords, params), tzinfo
            )
            print(build_sunnah_lines(times, tomorrow, params.method, format_24h))
        print()

    if args.json:
        print(json.dumps(payloads if len(payloads) > 1 else payloads[0], ensure_ascii=True, indent=2))
    return 0


def handle_cli(args):
    config_path = args.config or CONFIG_PATH
    config = load_config(config_path)

    if args.list_methods:
        for name in get_available_methods():
            print(f"{name.value}: {get_method_description(name)}")
        return 0

    if args.list_locations:
        for name, loc in config.get("locations", {}).items():
            label = loc.get("label") or name
            marker = "*" if name == config.get("location") else " "
            tz = loc.get("tz") or config.get("default_tz") or "local"
            print(f"{marker} {name}: {label} ({loc.get('lat')}, {loc.get('lng')}) [{tz}]")
        return 0

    if args.use_location:
        if args.use_location not in config.get("locations", {}):
            raise ConfigError(f"Unknown location: {args.use_location}")
        config["location"] = args.use_location
        save_config(config, config_path)
        return 0

    if args.set_method:
        try:
            config["method"] = parse_method_name(args.set_method).value
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        save_config(config, config_path)
        return 0

    if args.set_offset:
        prayer, minutes = args.set_offset
        set_offset(config, prayer, minutes)
        save_config(config, config_path)
        return 0

    if args.set_location:
        if args.lat is None or args.lng is None:
            raise ConfigError("--set-location requires --lat and --lng")
        config.setdefault("locations", {})[args.set_location] = {
            "lat": float(args.lat),
            "lng": float(args.lng),
            "elevation": float(args.elevation or 0.0),
            "label": args.set_location,
            "tz": args.tz or config.get("default_tz")
        }
        config["location"] = args.set_location
        save_config(config, config_path)
        return 0

    return show_times(config, args)


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Islamic prayer times")
    parser.add_argument("--date", type=_parse_date, help="Date as YYYY-MM-DD (default: today)")
    parser.add_argument("--days", type=int, default=1, help="Number of consecutive days")
    parser.add_argument("--lat", type=float, help="Latitude in degrees")
    parser.add_argument("--lng", type=float, help="Longitude in degrees")
    parser.add_argument("--elevation", type=float, help="Elevation in meters")
    parser.add_argument("--tz", help="IANA time zone for printed times and --set-location")
    parser.add_argument("--method", help="Calculation method for this run")
    parser.add_argument("--asr", help="Asr method: Standard or Hanafi")
    parser.add_argument("--high-lat", help="High latitude method: None, NightMiddle, OneSeventh, AngleBased")
    parser.add_argument("--12h", dest="twelve_hour", action="store_true", help="Use 12-hour clock")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--status", action="store_true", help="Print next prayer and countdown")
    parser.add_argument("--sunnah", action="store_true", help="Include midnight and last third of the night")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--list-locations", action="store_true", help="List locations from config")
    parser.add_argument("--use-location", help="Switch current location")
    parser.add_argument("--set-location", help="Add or update a location (with --lat/--lng) and set it active")
    parser.add_argument("--set-method", help="Set calculation method")
    parser.add_argument("--set-offset", nargs=2, metavar=("PRAYER", "MIN"), help="Set prayer offset in minutes")
    parser.add_argument("--config", help="Path to config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return handle_cli(args)
    except Exception as exc:
        if args.json:
            print(json.dumps({"error": str(exc)}, ensure_ascii=True))
            return 1
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
