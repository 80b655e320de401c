"""
Time reduction: Julian Day to the VSOP87 time variable and the precession
angle needed to relate the equinox-of-date versions to J2000.0.
"""
from dataclasses import dataclass
import datetime
import math

from .variants import Variant

J2000 = 2451545.0
DAYS_PER_MILLENNIUM = 365250.0
ARCSEC = math.pi / 180.0 / 3600.0

# General precession in longitude, Lieske et al. (1977), arcsec per Julian century^k.
PRECESSION_COEFFS = (0.0, 5029.0966, 1.11113, -0.000006)

@dataclass(frozen=True)
class TimeReduction:
    t: float
    precession: float = 0.0

def calculate_t(julian_day: float) -> float:
    """
    Julian millennia since J2000.0. Exactly 0.0 at JD 2451545.0.
    """
    return (julian_day - J2000) / DAYS_PER_MILLENNIUM

def precession_angle(t: float) -> float:
    """
    Accumulated general precession in longitude (radians) between J2000.0 and
    the equinox of date, t in Julian millennia.
    """
    tc = 10.0 * t
    p = 0.0
    for coeff in reversed(PRECESSION_COEFFS):
        p = p * tc + coeff
    return p * ARCSEC

def reduce_time(julian_day: float, variant=Variant.VSOP87) -> TimeReduction:
    t = calculate_t(julian_day)
    if Variant.parse(variant).of_date:
        return TimeReduction(t, precession_angle(t))
    return TimeReduction(t)

def julian_day(year: int, month: int, day: float, hour=0, minute=0, second=0.0) -> float:
    """
    Julian Day of a calendar date (Meeus, Astronomical Algorithms, ch. 7).
    Dates before 1582-10-15 are taken in the Julian calendar.
    """
    day = day + (hour + (minute + second / 60.0) / 60.0) / 24.0
    if month <= 2:
        year -= 1
        month += 12
    gregorian = (year, month, day) >= (1582, 10, 15)
    if gregorian:
        a = math.floor(year / 100)
        b = 2 - a + math.floor(a / 4)
    else:
        b = 0
    return math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + b - 1524.5

def julian_day_from_datetime(dt: datetime.datetime) -> float:
    # Aware datetimes are converted to UTC, naive ones are used as they are.
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc)
    return julian_day(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second + dt.microsecond * 1e-6)
