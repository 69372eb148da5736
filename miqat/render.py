from dataclasses import replace
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .calc import format_prayer_times, get_current_prayer
from .errors import ConfigError
from .methods import get_method_description
from .models import PRAYER_LABELS
from .sunnah import calculate_midnight, calculate_sunnah_times

DEFAULT_DISPLAY_FORMAT = "{next_name} {next_time} - {countdown}"


def get_timezone(tz_name):
    if not tz_name:
        return datetime.now().astimezone().tzinfo
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown time zone: {tz_name}") from exc


def localize_times(times, tzinfo):
    # calculated clock hours are UTC
    return replace(times, **{
        key: value.replace(tzinfo=timezone.utc).astimezone(tzinfo) for key, value in times
    })


def format_clock(dt, format_24h):
    if format_24h:
        return dt.strftime("%H:%M")
    return dt.strftime("%I:%M %p").lstrip("0")


def format_countdown(delta):
    total_minutes = int(delta.total_seconds() // 60)
    if total_minutes < 0:
        total_minutes = 0
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h{minutes:02d}"
    return f"{minutes}m"


def build_table(times, day, method, asr_method, location_label, format_24h):
    lines = [
        f"{location_label} {day.isoformat()} ({method.name.value}, Asr: {asr_method.value})",
        f"  {get_method_description(method.name)}",
    ]
    formatted = format_prayer_times(times, use_24_hour=format_24h)
    for key, value in formatted.items():
        lines.append(f"{PRAYER_LABELS[key]:<8} {value}")
    return "\n".join(lines)


def next_prayer(now, today_times, tomorrow_times):
    info = get_current_prayer(today_times, now, next_fajr=tomorrow_times.fajr)
    if info.next == "fajr" and now >= today_times.fajr:
        return info.next, tomorrow_times.fajr
    return info.next, getattr(today_times, info.next)


def render_status(now, today_times, tomorrow_times, format_24h=True, display_format=None):
    key, next_dt = next_prayer(now, today_times, tomorrow_times)
    display_format = display_format or DEFAULT_DISPLAY_FORMAT
    return display_format.format(
        next_name=PRAYER_LABELS[key],
        next_time=format_clock(next_dt, format_24h),
        countdown=format_countdown(next_dt - now),
    )


def build_sunnah_lines(today_times, tomorrow_times, method, format_24h):
    sunnah = calculate_sunnah_times(today_times, tomorrow_times.fajr)
    midnight = calculate_midnight(
        today_times.maghrib,
        tomorrow_times.sunrise,
        tomorrow_times.fajr,
        method.midnight or "Standard",
    )
    return "\n".join([
        f"Midnight    {format_clock(midnight, format_24h)}",
        f"Half night  {format_clock(sunnah.middle_of_the_night, format_24h)}",
        f"Last third  {format_clock(sunnah.last_third_of_the_night, format_24h)}",
    ])


def build_payload(times, day, method, location_label):
    return {
        "date": day.isoformat(),
        "location": location_label,
        "method": method.name.value,
        "times": {key: value.isoformat() for key, value in times},
    }
