import logging
import math
from dataclasses import replace
from datetime import datetime, time, timedelta

from .errors import CalculationFailed, InvalidLocation
from .methods import get_method
from .models import (
    PRAYER_KEYS,
    AsrMethod,
    CalculationParams,
    Coordinates,
    CurrentPrayer,
    HighLatitudeMethod,
    MethodName,
    PrayerAdjustments,
    PrayerTimes,
    PrayerTimesNumeric,
    SunPosition,
)
from .utils import clamp, format_time, to_degrees, to_julian_day, to_radians, validate_coordinates

log = logging.getLogger(__name__)

HIGH_LATITUDE_THRESHOLD = 48.0
RISE_SET_ANGLE = 0.833
ELEVATION_DIP = 0.0347
ORBIT_ECCENTRICITY = 0.0167


def sun_position(jd):
    d = jd - 2451545.0
    g = to_radians(357.529 + 0.98560028 * d)
    c = 1.915 * math.sin(g) + 0.020 * math.sin(2 * g)
    L = to_radians(280.459 + 0.98564736 * d + c)
    e = to_radians(23.439 - 0.00000036 * d)

    decl = to_degrees(math.asin(math.sin(e) * math.sin(L)))

    y = math.tan(e / 2) ** 2
    ecc = ORBIT_ECCENTRICITY
    eqt = 4 * to_degrees(
        y * math.sin(2 * L)
        - 2 * ecc * math.sin(g)
        + 4 * ecc * y * math.sin(g) * math.cos(2 * L)
        - 0.5 * y * y * math.sin(4 * L)
        - 1.25 * ecc * ecc * math.sin(2 * g)
    )
    return SunPosition(declination=decl, equation_of_time=eqt)


def solar_noon(longitude, sun):
    return 12.0 - longitude / 15.0 - sun.equation_of_time / 60.0


def _saturate(cos_h):
    # Invariant: the value handed to acos is always in [-1, 1]. Outside that
    # range the sun never reaches the target altitude today; pinning it yields
    # an hour angle of 0h or 12h, which resolve_high_latitude then replaces.
    if not -1.0 <= cos_h <= 1.0:
        log.debug("Hour angle saturated (cos=%.4f), target altitude not reached", cos_h)
    return clamp(cos_h, -1.0, 1.0)


def hour_angle(altitude, latitude, declination):
    """Hours between solar noon and the moment the sun stands at ``altitude`` degrees."""
    lat = to_radians(latitude)
    dec = to_radians(declination)
    numerator = math.sin(to_radians(altitude)) - math.sin(lat) * math.sin(dec)
    denominator = math.cos(lat) * math.cos(dec)
    return to_degrees(math.acos(_saturate(numerator / denominator))) / 15.0


def rise_set_angle(elevation):
    return RISE_SET_ANGLE + ELEVATION_DIP * math.sqrt(max(0.0, elevation))


def asr_altitude(asr_method, latitude, declination):
    factor = AsrMethod(asr_method).factor
    return to_degrees(math.atan(1.0 / (factor + math.tan(to_radians(abs(latitude - declination))))))


def compute_times(
    latitude,
    longitude,
    elevation,
    sun,
    fajr_angle,
    isha_angle,
    maghrib_angle=None,
    isha_interval=None,
    asr_method=AsrMethod.STANDARD,
):
    decl = sun.declination
    noon = solar_noon(longitude, sun)

    def below_horizon(angle):
        return hour_angle(-angle, latitude, decl)

    horizon = below_horizon(rise_set_angle(elevation))
    sunrise = noon - horizon
    sunset = noon + horizon
    fajr = noon - below_horizon(fajr_angle)
    asr = noon + hour_angle(asr_altitude(asr_method, latitude, decl), latitude, decl)

    maghrib = noon + below_horizon(maghrib_angle) if maghrib_angle else sunset

    if isha_interval:
        isha = maghrib + isha_interval / 60.0
    else:
        isha = noon + below_horizon(isha_angle)

    return PrayerTimesNumeric(
        fajr=fajr,
        sunrise=sunrise,
        dhuhr=noon,
        asr=asr,
        maghrib=maghrib,
        isha=isha,
    )


def resolve_high_latitude(times, method, latitude, fajr_angle, isha_angle):
    method = HighLatitudeMethod(method)
    if method is HighLatitudeMethod.NONE or abs(latitude) < HIGH_LATITUDE_THRESHOLD:
        return times

    night = times.sunrise - times.maghrib + 24.0
    if method is HighLatitudeMethod.NIGHT_MIDDLE:
        fajr_diff = isha_diff = night / 2.0
    elif method is HighLatitudeMethod.ONE_SEVENTH:
        fajr_diff = isha_diff = night / 7.0
    else:
        fajr_diff = night * fajr_angle / 60.0
        isha_diff = night * isha_angle / 60.0

    fajr = max(times.fajr, times.sunrise - fajr_diff)
    isha = min(times.isha, times.maghrib + isha_diff)
    if fajr != times.fajr or isha != times.isha:
        log.debug(
            "High latitude %s engaged at %.4f: fajr %.4f -> %.4f, isha %.4f -> %.4f",
            method.value, latitude, times.fajr, fajr, times.isha, isha,
        )
    return replace(times, fajr=fajr, isha=isha)


def apply_manual_adjustments(times, adjustments):
    if adjustments is None:
        return times
    return PrayerTimesNumeric(**{
        key: getattr(times, key) + (getattr(adjustments, key) or 0) / 60.0
        for key in PRAYER_KEYS
    })


def _midnight_of(day):
    if isinstance(day, datetime):
        return day.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(day, time())


def to_timestamp(value, day):
    hours = math.floor(value)
    # half a minute rounds up
    minutes = math.floor((value - hours) * 60 + 0.5)
    # timedelta carries minute 60, hour 24 and negative hours across days
    return _midnight_of(day) + timedelta(hours=hours, minutes=minutes)


def _coordinates(location):
    if isinstance(location, Coordinates):
        return location
    try:
        return Coordinates(
            latitude=float(location["latitude"]),
            longitude=float(location["longitude"]),
            elevation=float(location.get("elevation") or 0.0),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidLocation(f"Invalid location: {location!r}") from exc


def get_default_params():
    return CalculationParams(
        method=get_method(MethodName.MWL),
        asr_method=AsrMethod.STANDARD,
        high_latitude_method=HighLatitudeMethod.NIGHT_MIDDLE,
    )


def calculate_prayer_times(day, location, params=None):
    coords = _coordinates(location)
    validate_coordinates(coords.latitude, coords.longitude)
    if params is None:
        params = get_default_params()
    method = params.method

    try:
        jd = to_julian_day(day)
        sun = sun_position(jd)
        log.debug(
            "jd=%s declination=%.4f eqt=%.4f min",
            jd, sun.declination, sun.equation_of_time,
        )
        raw = compute_times(
            coords.latitude,
            coords.longitude,
            coords.elevation or 0.0,
            sun,
            method.fajr_angle,
            method.isha_angle,
            method.maghrib_angle,
            method.isha_interval,
            params.asr_method,
        )
        log.debug("raw times for %s: %s", day, raw)
        resolved = resolve_high_latitude(
            raw,
            params.high_latitude_method,
            coords.latitude,
            method.fajr_angle,
            method.isha_angle,
        )
        final = apply_manual_adjustments(resolved, params.adjustments or PrayerAdjustments())
        return PrayerTimes(**{key: to_timestamp(getattr(final, key), day) for key in PRAYER_KEYS})
    except Exception as exc:
        raise CalculationFailed(f"Prayer time calculation failed: {exc}") from exc


def format_prayer_times(times, use_24_hour=True):
    def fmt(dt):
        if use_24_hour:
            return format_time(dt.hour, dt.minute)
        period = "AM" if dt.hour < 12 else "PM"
        return f"{dt.hour % 12 or 12}:{dt.minute:02d} {period}"

    return {key: fmt(value) for key, value in times}


def get_current_prayer(times, now=None, next_fajr=None):
    if now is None:
        now = datetime.now(times.fajr.tzinfo)

    current, upcoming, next_time = "isha", "fajr", times.fajr
    for index, key in enumerate(PRAYER_KEYS):
        if index + 1 < len(PRAYER_KEYS):
            next_key = PRAYER_KEYS[index + 1]
            end = getattr(times, next_key)
        else:
            next_key = "fajr"
            end = next_fajr if next_fajr is not None else times.fajr + timedelta(days=1)
        if getattr(times, key) <= now < end:
            current, upcoming, next_time = key, next_key, end
            break

    minutes = round((next_time - now).total_seconds() / 60)
    return CurrentPrayer(current=current, next=upcoming, minutes_until_next=minutes)


def get_time_until_next_prayer(times, now=None, next_fajr=None):
    return get_current_prayer(times, now, next_fajr).minutes_until_next
