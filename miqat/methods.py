from dataclasses import fields, replace
from types import MappingProxyType

from .models import (
    CalculationMethod,
    MethodName,
    MidnightMode,
    PrayerAdjustments,
    Rounding,
    Shafaq,
)

METHODS = MappingProxyType({
    MethodName.MWL: CalculationMethod(
        name=MethodName.MWL,
        fajr_angle=18,
        isha_angle=17,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    MethodName.ISNA: CalculationMethod(
        name=MethodName.ISNA,
        fajr_angle=15,
        isha_angle=15,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    MethodName.EGYPT: CalculationMethod(
        name=MethodName.EGYPT,
        fajr_angle=19.5,
        isha_angle=17.5,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    MethodName.MAKKAH: CalculationMethod(
        name=MethodName.MAKKAH,
        fajr_angle=18.5,
        isha_angle=0,
        isha_interval=90,
    ),
    MethodName.KARACHI: CalculationMethod(
        name=MethodName.KARACHI,
        fajr_angle=18,
        isha_angle=18,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    MethodName.TEHRAN: CalculationMethod(
        name=MethodName.TEHRAN,
        fajr_angle=17.7,
        isha_angle=14,
        maghrib_angle=4.5,
        midnight=MidnightMode.JAFARI,
    ),
    MethodName.JAFARI: CalculationMethod(
        name=MethodName.JAFARI,
        fajr_angle=16,
        isha_angle=14,
        maghrib_angle=4,
        midnight=MidnightMode.JAFARI,
    ),
    MethodName.DUBAI: CalculationMethod(
        name=MethodName.DUBAI,
        fajr_angle=18.2,
        isha_angle=18.2,
        method_adjustments=PrayerAdjustments(sunrise=-3, dhuhr=3, asr=3, maghrib=3),
    ),
    MethodName.QATAR: CalculationMethod(
        name=MethodName.QATAR,
        fajr_angle=18,
        isha_angle=0,
        isha_interval=90,
    ),
    MethodName.KUWAIT: CalculationMethod(
        name=MethodName.KUWAIT,
        fajr_angle=18,
        isha_angle=17.5,
    ),
    MethodName.SINGAPORE: CalculationMethod(
        name=MethodName.SINGAPORE,
        fajr_angle=20,
        isha_angle=18,
        method_adjustments=PrayerAdjustments(dhuhr=1),
        rounding=Rounding.UP,
    ),
    MethodName.TURKEY: CalculationMethod(
        name=MethodName.TURKEY,
        fajr_angle=18,
        isha_angle=17,
        method_adjustments=PrayerAdjustments(sunrise=-7, dhuhr=5, asr=4, maghrib=7),
    ),
    # special handling above 55 degrees is described by the shafaq variant
    MethodName.MOONSIGHTING_COMMITTEE: CalculationMethod(
        name=MethodName.MOONSIGHTING_COMMITTEE,
        fajr_angle=18,
        isha_angle=18,
        shafaq=Shafaq.GENERAL,
        method_adjustments=PrayerAdjustments(dhuhr=5, maghrib=3),
    ),
    MethodName.CUSTOM: CalculationMethod(
        name=MethodName.CUSTOM,
        fajr_angle=18,
        isha_angle=17,
    ),
})

METHOD_DESCRIPTIONS = MappingProxyType({
    MethodName.MWL: "Muslim World League - Used in Europe, Far East, and parts of USA",
    MethodName.ISNA: "Islamic Society of North America - Used in North America",
    MethodName.EGYPT: "Egyptian General Authority of Survey - Used in Africa, Syria, Lebanon",
    MethodName.MAKKAH: "Umm al-Qura University, Makkah - Used in Arabian Peninsula",
    MethodName.KARACHI: "University of Islamic Sciences, Karachi - Used in Pakistan, Afghanistan",
    MethodName.TEHRAN: "Institute of Geophysics, University of Tehran - Used in Iran",
    MethodName.JAFARI: "Shia Ithna Ashari, Leva Research Institute, Qum",
    MethodName.DUBAI: "Dubai - United Arab Emirates",
    MethodName.QATAR: "Qatar - Gulf region",
    MethodName.KUWAIT: "Kuwait - Gulf region",
    MethodName.SINGAPORE: "Majlis Ugama Islam Singapura - Used in Singapore, Brunei",
    MethodName.TURKEY: "Diyanet Isleri Baskanligi - Used in Turkey, Turkic republics",
    MethodName.MOONSIGHTING_COMMITTEE: "Moonsighting Committee Worldwide - Uses physical sighting criteria",
    MethodName.CUSTOM: "Custom calculation parameters",
})

REGIONAL_METHODS = MappingProxyType({
    "middle_east": (
        MethodName.MAKKAH,
        MethodName.EGYPT,
        MethodName.DUBAI,
        MethodName.QATAR,
        MethodName.KUWAIT,
    ),
    "asia": (MethodName.KARACHI, MethodName.SINGAPORE, MethodName.TURKEY),
    "north_america": (MethodName.ISNA, MethodName.MOONSIGHTING_COMMITTEE),
    "europe": (MethodName.MWL, MethodName.MOONSIGHTING_COMMITTEE),
})

_METHOD_FIELDS = {f.name for f in fields(CalculationMethod)}


def parse_method_name(name):
    if isinstance(name, MethodName):
        return name
    key = str(name).strip().lower()
    for member in MethodName:
        if member.value.lower() == key or member.name.lower() == key:
            return member
    raise ValueError(f"Unknown method: {name}")


def get_method(name):
    return replace(METHODS[parse_method_name(name)])


def create_custom_method(fajr_angle, isha_angle, overrides=None):
    """Build a Custom method; keys in ``overrides`` win over the positional angles."""
    values = {"fajr_angle": fajr_angle, "isha_angle": isha_angle}
    overrides = dict(overrides or {})
    unknown = set(overrides) - _METHOD_FIELDS
    if unknown:
        raise TypeError(f"Unknown method fields: {', '.join(sorted(unknown))}")
    values.update(overrides)
    values["name"] = MethodName.CUSTOM
    return CalculationMethod(**values)


def get_available_methods():
    return list(METHODS)


def get_method_description(name):
    return METHOD_DESCRIPTIONS[parse_method_name(name)]


def get_regional_methods():
    return {region: list(names) for region, names in REGIONAL_METHODS.items()}
