"""
Coordinate types and the conversions between rectangular and spherical
coordinates, origin shifts and frame rotations.

All positions are in AU, angles in radians and rates per day. Conversions are
pure: a NaN or infinite input poisons every field of the result, or raises
InvalidInput when called with `strict=True`.
"""
from dataclasses import astuple, dataclass
import math

import numpy as np

from .errors import InvalidInput
from .variants import RECTANGULAR, SPHERICAL, SUN, Variant

TWO_PI = 2.0 * math.pi
NAN = math.nan

# Rotation from the VSOP87 ecliptic J2000.0 frame to FK5 (~ICRF) equatorial.
VSOP87_TO_FK5 = np.array([
    [ 1.0,            0.00000044036,  -0.000000190919],
    [-0.000000479966, 0.917482137087, -0.397776982902],
    [ 0.0,            0.397776982902,  0.917482137087]
])

@dataclass(frozen=True)
class RectangularCoordinates:
    x: float
    y: float
    z: float

    def __iter__(self):
        return iter(astuple(self))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def norm(self) -> float:
        return math.sqrt(self.x*self.x + self.y*self.y + self.z*self.z)

    def __sub__(self, other):
        return RectangularCoordinates(self.x - other.x, self.y - other.y, self.z - other.z)

@dataclass(frozen=True)
class SphericalCoordinates:
    longitude: float
    latitude: float
    radius: float

    def __iter__(self):
        return iter(astuple(self))

    def distance(self) -> float:
        return self.radius

NAN_RECTANGULAR = RectangularCoordinates(NAN, NAN, NAN)
NAN_SPHERICAL = SphericalCoordinates(NAN, NAN, NAN)

@dataclass(frozen=True)
class VSOP87Elements:
    """
    The six numbers produced by one VSOP87 version for one body and date.
    Their meaning depends on the version (see `Variant.slot_names`):

    - VSOP87: a, l, k, h, q, p (elliptic elements, l is the mean longitude)
    - A, C, E: x, y, z, vx, vy, vz
    - B, D: longitude, latitude, radius and their rates

    Slots can be read by name, e.g. `elements.radius` for B and D.
    `origin` is 'SUN' except for unshifted VSOP87E output ('BARYCENTER').
    """
    variant: Variant
    body: str
    values: tuple
    origin: str = None

    def __post_init__(self):
        if len(self.values) != 6:
            raise ValueError(f'VSOP87Elements needs 6 values, got {len(self.values)}')
        object.__setattr__(self, 'values', tuple(float(v) for v in self.values))
        if self.origin is None:
            object.__setattr__(self, 'origin', self.variant.origin)

    def __getattr__(self, name):
        if name.startswith('_') or name in ('variant', 'values', 'body', 'origin'):
            raise AttributeError(name)
        names = self.variant.slot_names
        if name in names:
            return self.values[names.index(name)]
        raise AttributeError(f'{self.variant.file_prefix} elements have no slot {name!r} (slots: {names})')

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __len__(self):
        return 6

    def as_dict(self):
        return dict(zip(self.variant.slot_names, self.values))

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.values)

def _finite_or_poisoned(values, strict, what):
    # True if all finite; False if the result has to be NaN-poisoned.
    if all(math.isfinite(v) for v in values):
        return True
    if strict:
        raise InvalidInput(f'Non-finite {what}: {tuple(values)}')
    return False

def rectangular_to_spherical(coords: RectangularCoordinates, strict=False) -> SphericalCoordinates:
    """
    Longitude in [0, 2pi), latitude in [-pi/2, pi/2].
    """
    if not _finite_or_poisoned(coords, strict, 'rectangular coordinates'):
        return NAN_SPHERICAL
    x, y, z = coords
    rho = math.hypot(x, y)
    return SphericalCoordinates(
        math.atan2(y, x) % TWO_PI,
        math.atan2(z, rho),
        math.sqrt(x*x + y*y + z*z),
    )

def spherical_to_rectangular(coords: SphericalCoordinates, strict=False) -> RectangularCoordinates:
    if not _finite_or_poisoned(coords, strict, 'spherical coordinates'):
        return NAN_RECTANGULAR
    lon, lat, r = coords
    q = r * math.cos(lat)
    return RectangularCoordinates(q * math.cos(lon), q * math.sin(lon), r * math.sin(lat))

def spherical_rates_to_velocity(coords: SphericalCoordinates, rates, strict=False) -> RectangularCoordinates:
    """
    Rectangular velocity from spherical coordinates and their rates
    (longitude_rate, latitude_rate, radius_rate).
    """
    if not _finite_or_poisoned(tuple(coords) + tuple(rates), strict, 'spherical state'):
        return NAN_RECTANGULAR
    lon, lat, r = coords
    dlon, dlat, dr = rates
    cos_lon, sin_lon = math.cos(lon), math.sin(lon)
    cos_lat, sin_lat = math.cos(lat), math.sin(lat)
    # d/dt of r*cos(lat), the distance from the z axis
    dq = dr * cos_lat - r * sin_lat * dlat
    q = r * cos_lat
    return RectangularCoordinates(
        dq * cos_lon - q * sin_lon * dlon,
        dq * sin_lon + q * cos_lon * dlon,
        dr * sin_lat + r * cos_lat * dlat,
    )

def elements_to_rectangular(elements: VSOP87Elements, strict=False) -> RectangularCoordinates:
    """
    Position of coordinate versions A-E by reinterpretation of the slots.
    Elliptic elements need the two-body solution in `vsop87.elements`.
    """
    representation = elements.variant.representation
    if representation == RECTANGULAR:
        if not _finite_or_poisoned(elements.values[:3], strict, 'elements'):
            return NAN_RECTANGULAR
        return RectangularCoordinates(*elements.values[:3])
    if representation == SPHERICAL:
        return spherical_to_rectangular(SphericalCoordinates(*elements.values[:3]), strict)
    raise TypeError('Elliptic elements: use vsop87.elements.vsop87_to_rectangular')

def elements_to_spherical(elements: VSOP87Elements, strict=False) -> SphericalCoordinates:
    representation = elements.variant.representation
    if representation == SPHERICAL:
        if not _finite_or_poisoned(elements.values[:3], strict, 'elements'):
            return NAN_SPHERICAL
        return SphericalCoordinates(*elements.values[:3])
    if representation == RECTANGULAR:
        return rectangular_to_spherical(RectangularCoordinates(*elements.values[:3]), strict)
    raise TypeError('Elliptic elements: use vsop87.elements.vsop87_to_spherical')

def elements_velocity(elements: VSOP87Elements, strict=False) -> RectangularCoordinates:
    """
    Rectangular velocity (AU/day) of coordinate versions A-E.
    """
    representation = elements.variant.representation
    if representation == RECTANGULAR:
        if not _finite_or_poisoned(elements.values[3:], strict, 'elements'):
            return NAN_RECTANGULAR
        return RectangularCoordinates(*elements.values[3:])
    if representation == SPHERICAL:
        return spherical_rates_to_velocity(SphericalCoordinates(*elements.values[:3]), elements.values[3:], strict)
    raise TypeError('Elliptic elements: use vsop87.elements.vsop87_velocity')

def shift_origin(elements: VSOP87Elements, origin_elements: VSOP87Elements) -> VSOP87Elements:
    """
    Refers barycentric VSOP87E output of a body to another body, normally the
    Sun: subtracts the state of `origin_elements` (also VSOP87E, same date).
    """
    if elements.variant is not Variant.E or origin_elements.variant is not Variant.E:
        raise ValueError('Origin shifts are defined between VSOP87E states')
    if elements.origin != origin_elements.origin:
        raise ValueError(f'Both states must share an origin ({elements.origin} != {origin_elements.origin})')
    values = tuple(a - b for a, b in zip(elements.values, origin_elements.values))
    return VSOP87Elements(Variant.E, elements.body, values, origin=origin_elements.body)

def rotation_matrix(k, theta):
    # Active rotation by theta about axis k (0=x, 1=y, 2=z).
    c, s = np.cos(theta), np.sin(theta)
    rot = np.zeros((3, 3))
    k1, k2 = (k+1)%3, (k+2)%3
    rot[k,k] = 1
    rot[k1,k1] = c
    rot[k1,k2] = -s
    rot[k2,k1] = s
    rot[k2,k2] = c
    return rot

def ecliptic_to_equatorial(coords: RectangularCoordinates) -> RectangularCoordinates:
    """
    Rotates ecliptic J2000.0 coordinates (versions A, B, E) to the FK5 equator.
    """
    return RectangularCoordinates(*(VSOP87_TO_FK5 @ coords.to_array()).tolist())

def equinox_of_date_to_j2000(coords, precession: float):
    """
    Refers coordinates of versions C and D to the equinox J2000.0 by a rotation
    about the ecliptic pole by the precession angle (see
    `vsop87.timescale.precession_angle`). The motion of the ecliptic itself
    (below 0.5" per century) is neglected.
    """
    return _rotate_about_pole(coords, -precession)

def j2000_to_equinox_of_date(coords, precession: float):
    return _rotate_about_pole(coords, precession)

def _rotate_about_pole(coords, angle):
    if isinstance(coords, SphericalCoordinates):
        return SphericalCoordinates((coords.longitude + angle) % TWO_PI, coords.latitude, coords.radius)
    rotated = rotation_matrix(2, angle) @ coords.to_array()
    return RectangularCoordinates(*rotated.tolist())

def origin_is_sun(elements: VSOP87Elements) -> bool:
    return elements.origin == SUN
