"""
VSOP87C: heliocentric ecliptic rectangular coordinates for the equinox of the day.

To refer the result to J2000.0 use
`coordinates.equinox_of_date_to_j2000(coords, timescale.reduce_time(jd, 'C').precession)`.
"""
from .solvers import solve_rectangular
from .variants import Variant

def mercury(julian_day: float, store=None):
    return solve_rectangular('MERCURY', Variant.C, julian_day, store)

def venus(julian_day: float, store=None):
    return solve_rectangular('VENUS', Variant.C, julian_day, store)

def earth(julian_day: float, store=None):
    return solve_rectangular('EARTH', Variant.C, julian_day, store)

def mars(julian_day: float, store=None):
    return solve_rectangular('MARS', Variant.C, julian_day, store)

def jupiter(julian_day: float, store=None):
    return solve_rectangular('JUPITER', Variant.C, julian_day, store)

def saturn(julian_day: float, store=None):
    return solve_rectangular('SATURN', Variant.C, julian_day, store)

def uranus(julian_day: float, store=None):
    return solve_rectangular('URANUS', Variant.C, julian_day, store)

def neptune(julian_day: float, store=None):
    return solve_rectangular('NEPTUNE', Variant.C, julian_day, store)
