"""
Body solvers: Julian Day -> time reduction -> variable assembly -> conversion.
"""
from .assembler import assemble
from .coordinates import shift_origin
from .elements import vsop87_to_keplerian, vsop87_to_rectangular, vsop87_to_spherical, vsop87_velocity
from .timescale import reduce_time
from .variants import SUN, Variant

def solve(body: str, variant, julian_day: float, store=None):
    """
    VSOP87Elements of body for the given version at julian_day (TDB).
    Non-finite julian_day gives NaN in every slot. The C and D series already
    include the precession of the equinox of date, so only t of the time
    reduction is used here.
    """
    return assemble(body, variant, reduce_time(julian_day, variant).t, store)

def solve_rectangular(body: str, variant, julian_day: float, store=None):
    return vsop87_to_rectangular(solve(body, variant, julian_day, store))

def solve_spherical(body: str, variant, julian_day: float, store=None):
    return vsop87_to_spherical(solve(body, variant, julian_day, store))

def solve_velocity(body: str, variant, julian_day: float, store=None):
    """
    Rectangular velocity in AU/day.
    """
    return vsop87_velocity(solve(body, variant, julian_day, store))

def solve_keplerian(body: str, variant, julian_day: float, store=None):
    """
    Osculating Keplerian elements. VSOP87E output is barycentric and must be
    shifted first, see solve_heliocentric.
    """
    return vsop87_to_keplerian(solve(body, variant, julian_day, store))

def solve_heliocentric(body: str, julian_day: float, store=None):
    """
    VSOP87E state of body referred to the Sun.
    """
    elements = solve(body, Variant.E, julian_day, store)
    return shift_origin(elements, solve(SUN, Variant.E, julian_day, store))
