from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

PRAYER_KEYS = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")

PRAYER_LABELS = {
    "fajr": "Fajr",
    "sunrise": "Sunrise",
    "dhuhr": "Dhuhr",
    "asr": "Asr",
    "maghrib": "Maghrib",
    "isha": "Isha",
}


class MethodName(str, Enum):
    MWL = "MWL"
    ISNA = "ISNA"
    EGYPT = "Egypt"
    MAKKAH = "Makkah"
    KARACHI = "Karachi"
    TEHRAN = "Tehran"
    JAFARI = "Jafari"
    DUBAI = "Dubai"
    QATAR = "Qatar"
    KUWAIT = "Kuwait"
    SINGAPORE = "Singapore"
    TURKEY = "Turkey"
    MOONSIGHTING_COMMITTEE = "MoonsightingCommittee"
    CUSTOM = "Custom"


class AsrMethod(str, Enum):
    STANDARD = "Standard"
    HANAFI = "Hanafi"

    @property
    def factor(self):
        # shadow length as a multiple of the object's height
        return 2 if self is AsrMethod.HANAFI else 1


class HighLatitudeMethod(str, Enum):
    NONE = "None"
    NIGHT_MIDDLE = "NightMiddle"
    ONE_SEVENTH = "OneSeventh"
    ANGLE_BASED = "AngleBased"


class MidnightMode(str, Enum):
    STANDARD = "Standard"
    JAFARI = "Jafari"


class Rounding(str, Enum):
    NEAREST = "nearest"
    UP = "up"
    NONE = "none"


class Shafaq(str, Enum):
    GENERAL = "general"
    AHMER = "ahmer"
    ABYAD = "abyad"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float
    elevation: float = 0.0


@dataclass(frozen=True)
class PrayerAdjustments:
    fajr: float = 0
    sunrise: float = 0
    dhuhr: float = 0
    asr: float = 0
    maghrib: float = 0
    isha: float = 0

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class CalculationMethod:
    name: MethodName
    fajr_angle: float
    isha_angle: float
    isha_interval: Optional[float] = None
    maghrib_angle: Optional[float] = None
    midnight: Optional[MidnightMode] = None
    method_adjustments: Optional[PrayerAdjustments] = None
    rounding: Optional[Rounding] = None
    shafaq: Optional[Shafaq] = None


@dataclass(frozen=True)
class CalculationParams:
    method: CalculationMethod
    asr_method: AsrMethod = AsrMethod.STANDARD
    high_latitude_method: HighLatitudeMethod = HighLatitudeMethod.NIGHT_MIDDLE
    adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)


@dataclass(frozen=True)
class SunPosition:
    declination: float
    equation_of_time: float


@dataclass
class PrayerTimesNumeric:
    fajr: float
    sunrise: float
    dhuhr: float
    asr: float
    maghrib: float
    isha: float


@dataclass(frozen=True)
class PrayerTimes:
    fajr: datetime
    sunrise: datetime
    dhuhr: datetime
    asr: datetime
    maghrib: datetime
    isha: datetime

    def __iter__(self):
        for key in PRAYER_KEYS:
            yield key, getattr(self, key)

    def as_dict(self):
        return dict(self)


@dataclass(frozen=True)
class CurrentPrayer:
    current: str
    next: str
    minutes_until_next: int


@dataclass(frozen=True)
class SunnahTimes:
    middle_of_the_night: datetime
    last_third_of_the_night: datetime


@dataclass(frozen=True)
class QiyamRange:
    start: datetime
    optimal: datetime
    end: datetime
