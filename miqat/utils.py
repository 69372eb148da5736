import math

from .errors import InvalidLocation


def to_radians(d):
    return (d * math.pi) / 180.0


def to_degrees(r):
    return (r * 180.0) / math.pi


def clamp(x, min_val, max_val):
    return max(min_val, min(max_val, x))


def format_time(hours, minutes):
    return f"{int(math.floor(hours)):02d}:{int(math.floor(minutes)):02d}"


def to_julian_day(day):
    """Julian Day Number of the civil date ``day`` (integer, noon-based)."""
    a = (14 - day.month) // 12
    y = day.year + 4800 - a
    m = day.month + 12 * a - 3
    return day.day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def validate_coordinates(latitude, longitude):
    if not (math.isfinite(latitude) and -90.0 <= latitude <= 90.0):
        raise InvalidLocation(
            f"Latitude must be between -90 and 90 degrees, got {latitude}",
            latitude=latitude,
            longitude=longitude,
        )
    if not (math.isfinite(longitude) and -180.0 <= longitude <= 180.0):
        raise InvalidLocation(
            f"Longitude must be between -180 and 180 degrees, got {longitude}",
            latitude=latitude,
            longitude=longitude,
        )
    return latitude, longitude
