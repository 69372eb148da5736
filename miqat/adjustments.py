from dataclasses import fields, replace
from datetime import timedelta
from types import MappingProxyType

from .models import PRAYER_KEYS, PrayerAdjustments


def create_adjustments(values=None, **minutes):
    merged = dict(values or {})
    merged.update(minutes)
    unknown = set(merged) - set(PRAYER_KEYS)
    if unknown:
        raise ValueError(f"Unknown prayer for adjustment: {', '.join(sorted(unknown))}")
    return PrayerAdjustments(**{key: merged.get(key) or 0 for key in PRAYER_KEYS})


def merge_adjustments(*layers):
    """Sum several adjustment sets; ``None`` layers are skipped.

    Presets carry their own ``method_adjustments`` which the calculator never
    applies on its own. Callers that want them combine them here explicitly:

        merge_adjustments(method.method_adjustments, manual)
    """
    totals = dict.fromkeys(PRAYER_KEYS, 0)
    for layer in layers:
        if layer is None:
            continue
        for f in fields(layer):
            totals[f.name] += getattr(layer, f.name) or 0
    return PrayerAdjustments(**totals)


def adjust_prayer_times(times, adjustments):
    shifted = {}
    for key, value in times:
        minutes = getattr(adjustments, key, 0)
        shifted[key] = value + timedelta(minutes=minutes) if minutes else value
    return replace(times, **shifted)


ADJUSTMENT_PRESETS = MappingProxyType({
    # safety margin around the boundaries
    "conservative": create_adjustments(fajr=-2, sunrise=0, dhuhr=2, asr=2, maghrib=2, isha=0),
    "standard": create_adjustments(),
    # time to prepare for prayer
    "with_preparation": create_adjustments(fajr=-5, dhuhr=5, asr=5, maghrib=3, isha=0),
})


def get_preset(name):
    try:
        return replace(ADJUSTMENT_PRESETS[name])
    except KeyError:
        raise ValueError(f"Unknown adjustment preset: {name}") from None
