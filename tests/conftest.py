# tests/conftest.py
"""
Pytest configuration for the miqat suite.

- Registers Hypothesis profiles for local dev and CI.
- Shared locations and a fixed set of prayer times used across the suite.
"""

import os
from datetime import datetime

import pytest
from hypothesis import HealthCheck, settings

from miqat.models import Coordinates, PrayerTimes

settings.register_profile(
    "dev",
    settings(
        deadline=None,
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=200,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_report_header(config):
    return f"Hypothesis profile: '{_profile}'"


@pytest.fixture
def london():
    return Coordinates(latitude=51.5074, longitude=-0.1278)


@pytest.fixture
def mecca():
    return Coordinates(latitude=21.4225, longitude=39.8262)


@pytest.fixture
def doha():
    return Coordinates(latitude=25.2854, longitude=51.531)


@pytest.fixture
def fixed_times():
    return PrayerTimes(
        fajr=datetime(2024, 1, 1, 5, 30),
        sunrise=datetime(2024, 1, 1, 7, 15),
        dhuhr=datetime(2024, 1, 1, 12, 30),
        asr=datetime(2024, 1, 1, 15, 45),
        maghrib=datetime(2024, 1, 1, 17, 30),
        isha=datetime(2024, 1, 1, 19, 0),
    )
