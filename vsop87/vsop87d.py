"""
VSOP87D: heliocentric ecliptic spherical coordinates for the equinox of the day.

Example, the Earth at J2000.0 with the bundled truncated tables:
```
from vsop87 import vsop87d

coords = vsop87d.earth(2451545.0)
coords.radius   # ~0.98333 AU
```
To refer the result to J2000.0 use
`coordinates.equinox_of_date_to_j2000(coords, timescale.reduce_time(jd, 'D').precession)`.
"""
from .solvers import solve_spherical
from .variants import Variant

def mercury(julian_day: float, store=None):
    return solve_spherical('MERCURY', Variant.D, julian_day, store)

def venus(julian_day: float, store=None):
    return solve_spherical('VENUS', Variant.D, julian_day, store)

def earth(julian_day: float, store=None):
    """
    Heliocentric longitude and latitude of the Earth for the equinox of date,
    and its distance from the Sun.
    """
    return solve_spherical('EARTH', Variant.D, julian_day, store)

def mars(julian_day: float, store=None):
    return solve_spherical('MARS', Variant.D, julian_day, store)

def jupiter(julian_day: float, store=None):
    return solve_spherical('JUPITER', Variant.D, julian_day, store)

def saturn(julian_day: float, store=None):
    return solve_spherical('SATURN', Variant.D, julian_day, store)

def uranus(julian_day: float, store=None):
    return solve_spherical('URANUS', Variant.D, julian_day, store)

def neptune(julian_day: float, store=None):
    return solve_spherical('NEPTUNE', Variant.D, julian_day, store)
