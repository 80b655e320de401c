"""
VSOP87 planetary theory: positions of the major planets from the periodic
series of Bretagnon & Francou (1988) in all six published versions.
"""
__version__ = '1.0.0'

from .variants import Variant
from .timescale import calculate_t, julian_day, precession_angle, reduce_time
from .terms import Term, TermSeries, TermTableStore, default_store
from .evaluator import calculate_var, calculate_var_avx, calculate_var_fallback
from .coordinates import (RectangularCoordinates, SphericalCoordinates, VSOP87Elements,
                          rectangular_to_spherical, spherical_to_rectangular, shift_origin)
from .elements import KeplerianElements, state_to_keplerian, vsop87_to_keplerian
from .errors import DegenerateGeometry, InvalidInput, TermTableError, VSOP87Error
from .solvers import solve, solve_keplerian, solve_rectangular, solve_spherical
from .elliptic import mercury, venus, earth_moon, mars, jupiter, saturn, uranus, neptune
from . import vsop87a, vsop87b, vsop87c, vsop87d, vsop87e

__all__ = [
    'Variant',
    'calculate_t',
    'julian_day',
    'precession_angle',
    'reduce_time',
    'Term',
    'TermSeries',
    'TermTableStore',
    'default_store',
    'calculate_var',
    'calculate_var_avx',
    'calculate_var_fallback',
    'RectangularCoordinates',
    'SphericalCoordinates',
    'VSOP87Elements',
    'KeplerianElements',
    'rectangular_to_spherical',
    'spherical_to_rectangular',
    'shift_origin',
    'state_to_keplerian',
    'vsop87_to_keplerian',
    'DegenerateGeometry',
    'InvalidInput',
    'TermTableError',
    'VSOP87Error',
    'solve',
    'solve_keplerian',
    'solve_rectangular',
    'solve_spherical',
    'mercury',
    'venus',
    'earth_moon',
    'mars',
    'jupiter',
    'saturn',
    'uranus',
    'neptune',
    'vsop87a',
    'vsop87b',
    'vsop87c',
    'vsop87d',
    'vsop87e',
]
