"""
VSOP87E: barycentric ecliptic rectangular coordinates for the equinox J2000.0.

The origin is the barycenter of the solar system. `solvers.solve_heliocentric`
refers a body to the Sun by subtracting the Sun's own VSOP87E state.
"""
from .solvers import solve_rectangular
from .variants import Variant

def sun(julian_day: float, store=None):
    return solve_rectangular('SUN', Variant.E, julian_day, store)

def mercury(julian_day: float, store=None):
    return solve_rectangular('MERCURY', Variant.E, julian_day, store)

def venus(julian_day: float, store=None):
    return solve_rectangular('VENUS', Variant.E, julian_day, store)

def earth(julian_day: float, store=None):
    return solve_rectangular('EARTH', Variant.E, julian_day, store)

def mars(julian_day: float, store=None):
    return solve_rectangular('MARS', Variant.E, julian_day, store)

def jupiter(julian_day: float, store=None):
    return solve_rectangular('JUPITER', Variant.E, julian_day, store)

def saturn(julian_day: float, store=None):
    return solve_rectangular('SATURN', Variant.E, julian_day, store)

def uranus(julian_day: float, store=None):
    return solve_rectangular('URANUS', Variant.E, julian_day, store)

def neptune(julian_day: float, store=None):
    return solve_rectangular('NEPTUNE', Variant.E, julian_day, store)
