"""
Osculating Keplerian elements and the two-body relations that connect them
to VSOP87 output.

Element conventions:

| Field               | Meaning                                         |
|---------------------|-------------------------------------------------|
| semi_major_axis     | a, AU                                           |
| eccentricity        | e                                               |
| inclination         | i, rad, w.r.t. the ecliptic of the version      |
| ascending_node      | longitude of the ascending node, rad            |
| perihelion_argument | argument of perihelion, rad                     |
| mean_anomaly        | rad                                             |

Only bound orbits (e < 1) are supported.

Degenerate geometry: when e or sin(i) is below DEGENERATE_TOLERANCE the
corresponding angles are not defined. The conversion then warns with
DegenerateGeometry and uses this convention:
- equatorial orbit: ascending_node = 0, so the perihelion argument is measured
  from the x axis.
- circular orbit: perihelion_argument = 0, so the mean anomaly is measured
  from the ascending node.
Near (not exactly at) these limits the angles are numerically unstable; their
sums (longitude of perihelion, mean longitude) remain accurate.
"""
from dataclasses import astuple, dataclass
import math
import warnings

from .coordinates import (NAN, NAN_RECTANGULAR, NAN_SPHERICAL, TWO_PI, RectangularCoordinates,
                          VSOP87Elements, _finite_or_poisoned, elements_to_rectangular,
                          elements_velocity, origin_is_sun, rectangular_to_spherical)
from .errors import DegenerateGeometry, InvalidInput
from .variants import ELLIPTIC, normalize_body

GAUSS_K = 0.01720209895
GM_SUN = GAUSS_K * GAUSS_K  # AU^3/day^2
DEGENERATE_TOLERANCE = 1.0e-10

# Inverse planetary masses (Sun mass / body mass) used by VSOP87.
INVERSE_MASSES = {
    'MERCURY': 6023600.0,
    'VENUS': 408523.5,
    'EARTH': 332946.0,
    'EARTH-MOON': 328900.5,
    'MARS': 3098710.0,
    'JUPITER': 1047.355,
    'SATURN': 3498.5,
    'URANUS': 22869.0,
    'NEPTUNE': 19314.0,
}

def gm(body: str) -> float:
    """
    Gravitational parameter of the heliocentric two-body problem for body,
    G*(M_sun + m), in AU^3/day^2.
    """
    body = normalize_body(body)
    if body == 'SUN':
        return GM_SUN
    return GM_SUN * (1.0 + 1.0 / INVERSE_MASSES[body])

@dataclass(frozen=True)
class KeplerianElements:
    semi_major_axis: float
    eccentricity: float
    inclination: float
    ascending_node: float
    perihelion_argument: float
    mean_anomaly: float
    # G*(M_sun + m) the elements were derived with, AU^3/day^2
    gm_value: float = GM_SUN

    def __iter__(self):
        return iter(astuple(self)[:6])

    @property
    def perihelion_longitude(self) -> float:
        return (self.ascending_node + self.perihelion_argument) % TWO_PI

    @property
    def mean_longitude(self) -> float:
        return (self.perihelion_longitude + self.mean_anomaly) % TWO_PI

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self)

    def to_rectangular(self, strict=False) -> RectangularCoordinates:
        return keplerian_to_state(self, strict=strict)[0]

    def to_spherical(self, strict=False):
        return rectangular_to_spherical(self.to_rectangular(strict), strict)

    def to_state(self, gm_value=None, strict=False):
        """
        Position (AU) and velocity (AU/day). gm_value defaults to the one the
        elements carry.
        """
        return keplerian_to_state(self, gm_value, strict)

NAN_KEPLERIAN = KeplerianElements(NAN, NAN, NAN, NAN, NAN, NAN)

def solve_kepler(mean_anomaly: float, eccentricity: float, tol=1.0e-15, max_iter=50) -> float:
    """
    Eccentric anomaly E from E - e*sin(E) = M by Newton iteration.
    """
    M = math.remainder(mean_anomaly, TWO_PI)
    E = M if eccentricity < 0.8 else math.pi * math.copysign(1.0, M)
    for _ in range(max_iter):
        f = E - eccentricity * math.sin(E) - M
        dE = f / (1.0 - eccentricity * math.cos(E))
        E -= dE
        if abs(dE) <= tol * max(1.0, abs(E)):
            break
    return E

def keplerian_to_state(elements: KeplerianElements, gm_value=None, strict=False):
    """
    Position and velocity from osculating elements (Montenbruck & Gill, eq. 2.43-2.44).
    """
    if gm_value is None:
        gm_value = elements.gm_value
    if not _finite_or_poisoned(tuple(elements) + (gm_value,), strict, 'Keplerian elements'):
        return NAN_RECTANGULAR, NAN_RECTANGULAR
    a, e, i, node, omega, M = elements
    if not 0.0 <= e < 1.0 or a <= 0.0:
        raise InvalidInput(f'Only bound orbits are supported (a={a}, e={e})')

    E = solve_kepler(M, e)

    cos_o, sin_o = math.cos(omega), math.sin(omega)
    cos_n, sin_n = math.cos(node), math.sin(node)
    cos_i, sin_i = math.cos(i), math.sin(i)
    # Perifocal unit vectors towards perihelion (P) and 90 degrees ahead (Q)
    P = (cos_o*cos_n - sin_o*cos_i*sin_n, cos_o*sin_n + sin_o*cos_i*cos_n, sin_o*sin_i)
    Q = (-sin_o*cos_n - cos_o*cos_i*sin_n, -sin_o*sin_n + cos_o*cos_i*cos_n, cos_o*sin_i)

    cos_E, sin_E = math.cos(E), math.sin(E)
    sqrt_1me2 = math.sqrt(1.0 - e*e)
    px, qx = a * (cos_E - e), a * sqrt_1me2 * sin_E
    position = RectangularCoordinates(*(px*P[k] + qx*Q[k] for k in range(3)))

    scale = math.sqrt(gm_value * a) / position.norm()
    pv, qv = -sin_E * scale, sqrt_1me2 * cos_E * scale
    velocity = RectangularCoordinates(*(pv*P[k] + qv*Q[k] for k in range(3)))
    return position, velocity

def state_to_keplerian(position: RectangularCoordinates, velocity: RectangularCoordinates,
                       gm_value=GM_SUN, strict=False) -> KeplerianElements:
    """
    Osculating elements from position (AU) and velocity (AU/day) using the
    angular momentum, vis-viva and eccentricity relations
    (Montenbruck & Gill, eq. 2.56-2.68).
    """
    if not _finite_or_poisoned(tuple(position) + tuple(velocity) + (gm_value,), strict, 'state vector'):
        return NAN_KEPLERIAN
    x, y, z = position
    vx, vy, vz = velocity
    r = position.norm()
    v2 = vx*vx + vy*vy + vz*vz

    # Angular momentum
    hx, hy, hz = y*vz - z*vy, z*vx - x*vz, x*vy - y*vx
    h = math.sqrt(hx*hx + hy*hy + hz*hz)
    if r == 0.0 or h == 0.0:
        raise InvalidInput('Rectilinear or zero state has no orbital plane')

    inclination = math.atan2(math.hypot(hx, hy), hz)
    a = 1.0 / (2.0/r - v2/gm_value)
    if a <= 0.0:
        raise InvalidInput(f'Only bound orbits are supported (a={a})')
    # Eccentricity vector ((v^2 - gm/r) r - (r.v) v) / gm
    rv = x*vx + y*vy + z*vz
    c1 = v2 - gm_value / r
    e = math.sqrt(sum((c1*pk - rv*vk)**2 for pk, vk in zip(position, velocity))) / gm_value

    # Eccentric anomaly from e*sin(E) and e*cos(E)
    E = math.atan2(rv / math.sqrt(gm_value * a), 1.0 - r/a)
    mean_anomaly = E - e * math.sin(E)

    equatorial = math.hypot(hx, hy) / h < DEGENERATE_TOLERANCE
    circular = e < DEGENERATE_TOLERANCE
    if equatorial:
        node = 0.0
        # True longitude stands in for the argument of latitude
        u = math.atan2(y, x) if hz >= 0.0 else math.atan2(-y, x)
    else:
        node = math.atan2(hx, -hy)
        u = math.atan2(z * h, y*hx - x*hy)
    if circular:
        omega = 0.0
        mean_anomaly = u
    else:
        nu = math.atan2(math.sqrt(1.0 - e*e) * math.sin(E), math.cos(E) - e)
        omega = u - nu
    if equatorial or circular:
        conventions = [text for text, flag in (('node set to 0', equatorial), ('perihelion set to the node', circular)) if flag]
        warnings.warn(f'Degenerate orbit (e={e:.3g}, i={inclination:.3g}): {", ".join(conventions)}',
                      DegenerateGeometry, stacklevel=2)

    return KeplerianElements(a, e, inclination, node % TWO_PI, omega % TWO_PI, mean_anomaly % TWO_PI, gm_value)

def elliptic_to_keplerian(elements: VSOP87Elements, strict=False) -> KeplerianElements:
    """
    Keplerian elements from the elliptic variables of the main VSOP87 version:
    k = e cos(pi), h = e sin(pi), q = sin(i/2) cos(node), p = sin(i/2) sin(node),
    where pi is the longitude of perihelion.
    """
    if not _finite_or_poisoned(elements.values, strict, 'elliptic elements'):
        return NAN_KEPLERIAN
    a, l, k, h, q, p = elements.values
    e = math.hypot(k, h)
    sin_half_i = math.hypot(q, p)
    inclination = 2.0 * math.asin(min(sin_half_i, 1.0))
    equatorial = sin_half_i < DEGENERATE_TOLERANCE
    circular = e < DEGENERATE_TOLERANCE

    node = 0.0 if equatorial else math.atan2(p, q)
    perihelion_longitude = node if circular else math.atan2(h, k)
    if equatorial or circular:
        warnings.warn(f'Degenerate orbit for {elements.body} (e={e:.3g}, sin(i/2)={sin_half_i:.3g})',
                      DegenerateGeometry, stacklevel=2)
    return KeplerianElements(
        a, e, inclination,
        node % TWO_PI,
        (perihelion_longitude - node) % TWO_PI,
        (l - perihelion_longitude) % TWO_PI,
        gm(elements.body),
    )

def vsop87_to_keplerian(elements: VSOP87Elements, strict=False) -> KeplerianElements:
    """
    Osculating Keplerian elements of any heliocentric VSOP87 output. VSOP87E
    output has to be referred to the Sun first (`coordinates.shift_origin`).
    """
    if not origin_is_sun(elements):
        raise ValueError(f'{elements.body} elements are referred to {elements.origin}; shift them to the Sun first')
    if elements.variant.representation == ELLIPTIC:
        return elliptic_to_keplerian(elements, strict)
    if not _finite_or_poisoned(elements.values, strict, 'elements'):
        return NAN_KEPLERIAN
    position = elements_to_rectangular(elements, strict)
    velocity = elements_velocity(elements, strict)
    return state_to_keplerian(position, velocity, gm(elements.body), strict)

def vsop87_to_rectangular(elements: VSOP87Elements, strict=False) -> RectangularCoordinates:
    if elements.variant.representation == ELLIPTIC:
        keplerian = elliptic_to_keplerian(elements, strict)
        return keplerian_to_state(keplerian, strict=strict)[0]
    return elements_to_rectangular(elements, strict)

def vsop87_to_spherical(elements: VSOP87Elements, strict=False):
    if not _finite_or_poisoned(elements.values, strict, 'elements'):
        return NAN_SPHERICAL
    return rectangular_to_spherical(vsop87_to_rectangular(elements, strict), strict)

def vsop87_velocity(elements: VSOP87Elements, strict=False) -> RectangularCoordinates:
    if elements.variant.representation == ELLIPTIC:
        keplerian = elliptic_to_keplerian(elements, strict)
        return keplerian_to_state(keplerian, strict=strict)[1]
    return elements_velocity(elements, strict)
