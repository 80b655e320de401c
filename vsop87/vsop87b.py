"""
VSOP87B: heliocentric ecliptic spherical coordinates for the equinox J2000.0.
Functions return SphericalCoordinates (longitude and latitude in radians,
radius in AU).
"""
from .solvers import solve_spherical
from .variants import Variant

def mercury(julian_day: float, store=None):
    return solve_spherical('MERCURY', Variant.B, julian_day, store)

def venus(julian_day: float, store=None):
    return solve_spherical('VENUS', Variant.B, julian_day, store)

def earth(julian_day: float, store=None):
    return solve_spherical('EARTH', Variant.B, julian_day, store)

def mars(julian_day: float, store=None):
    return solve_spherical('MARS', Variant.B, julian_day, store)

def jupiter(julian_day: float, store=None):
    return solve_spherical('JUPITER', Variant.B, julian_day, store)

def saturn(julian_day: float, store=None):
    return solve_spherical('SATURN', Variant.B, julian_day, store)

def uranus(julian_day: float, store=None):
    return solve_spherical('URANUS', Variant.B, julian_day, store)

def neptune(julian_day: float, store=None):
    return solve_spherical('NEPTUNE', Variant.B, julian_day, store)
