"""
Main version of VSOP87: heliocentric elliptic elements (a, l, k, h, q, p)
referred to the ecliptic and equinox J2000.0.

Example:
```
from vsop87 import earth_moon
from vsop87.elements import elliptic_to_keplerian

elements = earth_moon(2451545.0)
keplerian = elliptic_to_keplerian(elements)
```
"""
from .solvers import solve
from .variants import Variant

def mercury(julian_day: float, store=None):
    """
    Elliptic elements of Mercury at julian_day. Returns VSOP87Elements with slots
    a (AU), l (mean longitude, rad), k, h, q, p.
    """
    return solve('MERCURY', Variant.VSOP87, julian_day, store)

def venus(julian_day: float, store=None):
    return solve('VENUS', Variant.VSOP87, julian_day, store)

def earth_moon(julian_day: float, store=None):
    """
    Elliptic elements of the Earth-Moon barycenter. The main version has no
    separate series for the Earth.
    """
    return solve('EARTH-MOON', Variant.VSOP87, julian_day, store)

def mars(julian_day: float, store=None):
    return solve('MARS', Variant.VSOP87, julian_day, store)

def jupiter(julian_day: float, store=None):
    return solve('JUPITER', Variant.VSOP87, julian_day, store)

def saturn(julian_day: float, store=None):
    return solve('SATURN', Variant.VSOP87, julian_day, store)

def uranus(julian_day: float, store=None):
    return solve('URANUS', Variant.VSOP87, julian_day, store)

def neptune(julian_day: float, store=None):
    return solve('NEPTUNE', Variant.VSOP87, julian_day, store)
