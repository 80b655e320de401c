"""
VSOP87A: heliocentric ecliptic rectangular coordinates for the equinox J2000.0.

Each function takes a Julian Day (TDB) and returns RectangularCoordinates in AU.
Use `vsop87.solvers.solve(body, 'A', jd)` for the velocities as well.
"""
from .solvers import solve_rectangular
from .variants import Variant

def mercury(julian_day: float, store=None):
    return solve_rectangular('MERCURY', Variant.A, julian_day, store)

def venus(julian_day: float, store=None):
    return solve_rectangular('VENUS', Variant.A, julian_day, store)

def earth(julian_day: float, store=None):
    return solve_rectangular('EARTH', Variant.A, julian_day, store)

def earth_moon(julian_day: float, store=None):
    """
    Earth-Moon barycenter. VSOP87A is the only coordinate version with a
    series for it.
    """
    return solve_rectangular('EARTH-MOON', Variant.A, julian_day, store)

def mars(julian_day: float, store=None):
    return solve_rectangular('MARS', Variant.A, julian_day, store)

def jupiter(julian_day: float, store=None):
    return solve_rectangular('JUPITER', Variant.A, julian_day, store)

def saturn(julian_day: float, store=None):
    return solve_rectangular('SATURN', Variant.A, julian_day, store)

def uranus(julian_day: float, store=None):
    return solve_rectangular('URANUS', Variant.A, julian_day, store)

def neptune(julian_day: float, store=None):
    return solve_rectangular('NEPTUNE', Variant.A, julian_day, store)
