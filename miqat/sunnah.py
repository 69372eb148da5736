"""Night portions between Maghrib and the following Fajr.

All helpers take the Maghrib of one day and the Fajr of the *next* day; the
night is the span between them.
"""

from datetime import timedelta

from .models import MidnightMode, QiyamRange, SunnahTimes


def get_night_portion(maghrib, fajr, fraction):
    return maghrib + (fajr - maghrib) * fraction


def get_night_duration(maghrib, fajr):
    return (fajr - maghrib) / timedelta(hours=1)


def calculate_sunnah_times(times, tomorrow_fajr):
    return SunnahTimes(
        middle_of_the_night=get_night_portion(times.maghrib, tomorrow_fajr, 1 / 2),
        last_third_of_the_night=get_night_portion(times.maghrib, tomorrow_fajr, 2 / 3),
    )


def is_last_third_of_night(moment, maghrib, fajr):
    start = get_night_portion(maghrib, fajr, 2 / 3)
    return start <= moment <= fajr


def get_qiyam_time_range(maghrib, fajr):
    return QiyamRange(
        start=get_night_portion(maghrib, fajr, 1 / 2),
        optimal=get_night_portion(maghrib, fajr, 2 / 3),
        end=fajr,
    )


def calculate_midnight(sunset, next_sunrise, next_fajr, mode=MidnightMode.STANDARD):
    # Standard: halfway from sunset to sunrise; Jafari: halfway to Fajr
    if MidnightMode(mode) is MidnightMode.JAFARI:
        return get_night_portion(sunset, next_fajr, 1 / 2)
    return get_night_portion(sunset, next_sunrise, 1 / 2)
